"""
Conversion errors.

Unsupported constructs (channel arrays, an existing main()) are not errors;
they become advisory comments in the output. Only the strict nested-call
guard raises.
"""

from typing import Optional


class ConversionError(Exception):
    """Raised when conversion fails."""
    def __init__(self, message: str, location: Optional[tuple] = None):
        self.message = message
        self.location = location
        if location:
            line, col = location
            super().__init__(f"{message} at line {line+1}, column {col+1}")
        else:
            super().__init__(message)


class AmbiguousSamplingCallError(ConversionError):
    """
    A texture() call on a known sampler has a nested call in its UV argument.

    The single-argument capture stops at the first ')' so the closing
    boundary of such a call cannot be located.
    """
