"""Service layer — operations exposed to the CLI as ServiceResult values."""
