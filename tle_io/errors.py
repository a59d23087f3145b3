class ParseError(ValueError):
    """Base class for everything that can go wrong reading a TLE."""


class MissingLine(ParseError):

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid TLE: expected {expected} lines but got {actual}")


class InvalidFormat(ParseError):

    def __init__(self, message):
        self.message = message
        super().__init__(f"Invalid TLE format: {message}")


class InvalidNumber(ParseError):

    def __init__(self, field, raw_value):
        self.field = field
        self.raw_value = raw_value
        super().__init__(f"Invalid number in field '{field}': '{raw_value}'")


class InvalidChecksum(ParseError):
    """expected is the digit found in column 69, actual is the computed one"""

    def __init__(self, line, expected, actual):
        self.line = line
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid checksum for line {line}: expected {expected} but got {actual}")


class InvalidEccentricity(ParseError):

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid eccentricity: {value} must be less than 1.0")
