class AlertDispatchError(Exception):
    """The alert sink did not accept an alert."""
