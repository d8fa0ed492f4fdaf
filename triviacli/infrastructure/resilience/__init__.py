"""Resilience helpers: the request rate gate, deadlines and the clocks they run on."""
