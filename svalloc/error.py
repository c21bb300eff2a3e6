class InvalidEvidenceError(ValueError):
    """
    raised when evidence is constructed over a read which cannot support it

    for example a soft clip requested on the side of a read which is not soft clipped
    """
    pass


class UnsupportedConfigurationError(NotImplementedError):
    """
    raised for inputs which are deliberately not handled rather than risk a wrong answer

    for example dovetail detection for libraries which are not FR paired
    """
    pass


class MissingTagError(KeyError):
    """
    raised when a read is missing a sam tag required for a calculation
    """
    pass


class InvalidKmerSizeError(ValueError):
    pass
