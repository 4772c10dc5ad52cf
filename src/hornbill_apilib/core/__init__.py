"""Core: configuración, dominio y lógica pura del protocolo xmlmc (sin I/O)."""
