class DTMFError(Exception):
    pass


class InvalidParameterError(DTMFError, ValueError):
    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__('; '.join(self.problems))


class UnknownSymbolError(DTMFError, KeyError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(symbol)

    def __str__(self):
        return f'Unknown DTMF symbol "{self.symbol}"'


class ConfigError(DTMFError):
    pass
