"""Provider-agnostic domain types, errors and pure services."""
