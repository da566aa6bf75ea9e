"""Internal system functions wrapped by the event classes."""
