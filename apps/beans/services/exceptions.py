"""Domain-specific exceptions for the bean catalog."""


class BeansServiceError(Exception):
    """Base exception for beans services."""
    pass


class BeanNotFoundError(BeansServiceError):
    """No catalog bean has the requested id."""
    pass


class DuplicateBeanError(BeansServiceError):
    """Catalog names are unique; raised by create_bean on a taken name."""
    pass
