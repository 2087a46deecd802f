"""
Challenge entity - the exact text a wallet is asked to sign.
"""

from dataclasses import dataclass

DEFAULT_APP_TITLE = "Token Metadata CMS"

CHALLENGE_TEMPLATE = (
    "{title} Authentication\n"
    "\n"
    "Action: {action}\n"
    "Timestamp: {timestamp}\n"
    "Nonce: {nonce}\n"
    "\n"
    "Please sign this message to verify your wallet ownership.\n"
    "This signature will not trigger any blockchain transaction."
)


@dataclass(frozen=True)
class Challenge:
    """
    Sign-in challenge.

    Never persisted; lives only until the wallet has signed it.
    """

    action: str
    timestamp_ms: int
    nonce: str

    def __post_init__(self):
        """Validate challenge fields."""
        if not self.action:
            raise ValueError("Challenge action is required")

        if "\n" in self.action or "\r" in self.action:
            raise ValueError("Challenge action must be a single line")

        if not self.nonce:
            raise ValueError("Challenge nonce is required")

    def render(self, title: str = DEFAULT_APP_TITLE) -> str:
        """Render challenge into the fixed human-readable template."""
        return CHALLENGE_TEMPLATE.format(
            title=title,
            action=self.action,
            timestamp=self.timestamp_ms,
            nonce=self.nonce,
        )
