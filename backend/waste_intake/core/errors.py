class DomainError(ValueError):
    """Caller broke the normalizer's contract (e.g. a seed of unsupported type)."""
