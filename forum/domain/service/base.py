"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business logic that spans entities or needs
    repositories; pure helpers live beside them as module functions.
    """

    pass
