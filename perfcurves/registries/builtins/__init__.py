"""Built-in registrations, imported lazily by the registry modules."""
