"""Errors raised by the codec. The CLI maps each one to an exit status."""


class CodecError(Exception):
    """Base class for every user-facing codec failure."""


class NotEncoded(CodecError):
    """The input does not start with the container magic value."""

    def __init__(self, message: str = "Input file was not Huffman encoded"):
        super().__init__(message)


class WouldNotShrink(CodecError):
    """The finished container would not be smaller than the input."""

    def __init__(self, original_size: int, estimated_size: int):
        self.original_size = original_size
        self.estimated_size = estimated_size
        super().__init__(
            f"File will not compress ({estimated_size} bytes >= {original_size} bytes)"
        )


class MalformedContainer(CodecError):
    """The magic value matched but the rest of the container is damaged."""
