"""
Credentials model for HTTP Basic authentication against Loki.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """
    Username/password pair sent as HTTP Basic auth.

    For Grafana Cloud the username is the stack ID and the password an API key.

    Attributes:
        username: Basic auth username.
        password: Basic auth password (hidden from repr).
    """

    username: str
    password: str = field(repr=False)

    def as_auth(self) -> tuple[str, str]:
        """
        Get the (username, password) tuple accepted by requests.

        Returns:
            Tuple of username and password.
        """
        return (self.username, self.password)

    @classmethod
    def from_dict(cls, data: dict) -> "Credentials":
        """
        Create Credentials from dictionary.

        Args:
            data: Dictionary with username and password keys.

        Returns:
            Credentials instance.
        """
        return cls(
            username=data["username"],
            password=data["password"]
        )
