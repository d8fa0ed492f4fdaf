"""Domain Layer: models, events, exceptions and the ports (interfaces) the other layers depend on."""
