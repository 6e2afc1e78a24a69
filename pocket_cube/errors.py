'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Exceptions raised by the pocket cube model and solvers.

'''


class PocketCubeError(Exception):
    """Base class for every error raised by this package."""


class InvalidMoveError(PocketCubeError, ValueError):
    """
    Raised when a move label is not part of the 18-move alphabet.

    The accepted grammar is one face letter in ``UDLRFB`` optionally followed
    by ``'`` (counter-clockwise) or ``2`` (half turn).
    """

    def __init__(self, label) -> None:
        self.label = label
        super().__init__(f"Unknown move label: {label!r}")


class InvalidStateError(PocketCubeError, ValueError):
    """Raised when an externally supplied cube state is malformed or unreachable."""
