from __future__ import annotations

"""Exception hierarchy shared by the harness, adapters and CLI.

Everything raised on purpose derives from `SigbenchError`, so the CLI can turn
any benchmark failure into a non-zero exit without catching library bugs.
"""


class SigbenchError(Exception):
    """Base class for all sigbench errors."""


class ConfigError(SigbenchError):
    """Invalid environment or command-line configuration."""


class FixtureError(SigbenchError):
    """Fixture file is unreadable or references unknown algorithms/sizes."""


class FixtureNotFoundError(FixtureError):
    """No fixture stored for an (algorithm, payload size) pair."""


class VerificationError(SigbenchError):
    """Input handling failed before or inside the verification primitive."""


class DecodeError(VerificationError):
    """Text input is not valid base64."""


class ParseError(VerificationError):
    """Decoded bytes cannot be interpreted as the scheme's key or signature."""


class KeyParseError(ParseError):
    pass


class SignatureParseError(ParseError):
    pass


class VerificationMismatch(SigbenchError):
    """A fixture that must validate did not."""

    def __init__(self, algorithm: str, payload_size: str, iteration: int) -> None:
        self.algorithm = algorithm
        self.payload_size = payload_size
        self.iteration = iteration
        super().__init__(
            f"{algorithm} verification failed on {payload_size} payload (iteration {iteration})"
        )


class UploadError(SigbenchError):
    """Report upload to the remote sink failed."""
