"""Base service class for domain services.

Provides a base class that domain services should inherit from.
"""


class Service:
    """Base service for domain business logic.

    This class serves as a marker base class for all domain services.
    Services receive their collaborators through the constructor and keep
    no mutable state of their own.

    Usage:
        ```python
        class AuthService(Service):
            def __init__(self, user_repo: UserRepository, token: TokenManager) -> None:
                self._user_repo = user_repo
                self._token = token
        ```
    """

    pass
