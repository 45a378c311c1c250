"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    A service owns the rules of one ledger (allow-list, join requests,
    invitations, profiles, permissions, audit) and is the only writer to its
    repository.
    """

    pass
