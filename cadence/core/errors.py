class CadenceError(Exception):
    pass


class ValidationError(CadenceError):
    pass


class InvalidInstant(ValidationError):
    pass


class InvalidFormat(ValidationError):
    pass


class InvalidTimezone(ValidationError):
    def __init__(self, zone: object):
        self.zone = zone
        super().__init__(f"unknown timezone '{zone}'")


class InvalidTimeframe(ValidationError):
    def __init__(self, timeframe: object):
        self.timeframe = timeframe
        super().__init__(f"unknown timeframe '{timeframe}' (expected daily, weekly or monthly)")


class InvalidFrequencyRule(ValidationError):
    pass


class NotFoundError(CadenceError):
    pass
