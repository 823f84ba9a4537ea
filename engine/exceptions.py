# engine/exceptions.py

class HiccupDetectionError(Exception):
    pass


class EmptyDetectionSeries(HiccupDetectionError):
    pass


class InsufficientBaseline(HiccupDetectionError):
    pass


class UnknownStrategy(HiccupDetectionError):
    pass


class ConfigurationError(ValueError):
    pass
