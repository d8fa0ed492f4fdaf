"""Domain Event definitions.

Represents significant occurrences during a question fetch that other parts
of the system might react to.
"""
