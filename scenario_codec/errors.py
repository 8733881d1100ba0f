#  Copyright 2025 $author, All rights reserved.

class ScenarioCodeError(ValueError):
    """Base for every reason a scenario code is rejected while decoding."""

class EmptyCodeError(ScenarioCodeError):
    pass

class InvalidCharacterError(ScenarioCodeError):
    pass

class EndOfDataError(ScenarioCodeError):
    pass

class UnsupportedVersionError(ScenarioCodeError):
    pass

class InvalidTimeUnitError(ScenarioCodeError):
    pass
