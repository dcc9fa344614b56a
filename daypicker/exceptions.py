"""Exception hierarchy for daypicker configuration errors.

Taps, programmatic selections and shortcut applications never raise: an
ineligible request is reported through a ``False`` return value and a log
line. The types below are reserved for input that cannot be normalized at
construction time.
"""


class PickerError(Exception):
    """Base exception for all daypicker errors.

    Catch this to handle any configuration problem raised by the package.
    """


class PickerConfigurationError(PickerError):
    """Picker configuration is invalid and cannot be normalized.

    Raised when:
    - A weekday ordinal falls outside 1..7
    - A selection mode name is unknown
    - A selection value variant cannot be converted to the session's mode
    """


class PickerTimezoneError(PickerConfigurationError):
    """Timezone name cannot be resolved.

    Raised when a ZoneInfo lookup fails for the calendar's timezone.
    """
