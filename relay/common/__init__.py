"""Constants, errors and message formatting shared by the relay modules."""
