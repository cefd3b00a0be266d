"""Foundation layer: configuration, logging and errors."""
