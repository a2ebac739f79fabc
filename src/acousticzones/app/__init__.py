"""
The APP layer owns the running simulation state and notifies the
Presentation Layer about changes through Qt signals.
"""
