__all__ = [
    "RegexSyntaxError",
    "AlphabetError",
]


class RegexSyntaxError(ValueError):
    position: int
    message: str

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at position {position}")
        self.message = message
        self.position = position


class AlphabetError(RegexSyntaxError):
    symbol: str

    def __init__(self, symbol: str, position: int):
        super().__init__(f"symbol {symbol!r} is not in the alphabet", position)
        self.symbol = symbol
