"""Base class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business rules that span an aggregate and its
    repository, or several aggregates.
    """

    pass
