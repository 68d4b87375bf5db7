class AontError(Exception):
    """Base class for package transform errors."""


# Encoding inputs
class InputError(AontError):
    pass


class BlockCountOverflow(InputError):
    pass


# Decoding inputs
class MissingBlocks(AontError):
    def __init__(self, expected: int, got: int):
        super().__init__(f"package needs {expected} blocks, got {got}")
        self.expected = expected
        self.got = got


class MalformedBlock(AontError):
    pass


# Hash providers
class HashProviderError(AontError):
    pass


class UnsupportedHashError(AontError):
    pass
