"""
Core infrastructure layer for Ghostagotchi.

- Configuration (Config)
- Database subsystem (DatabaseService, declarative base)
- Logging (structured logging, LogContext)
- Language-model client (LanguageModelClient)
- Infrastructure exceptions
- Service container and error formatting
"""
