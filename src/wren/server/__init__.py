"""Request pipeline, response sending, logging, and pounce launchers."""
