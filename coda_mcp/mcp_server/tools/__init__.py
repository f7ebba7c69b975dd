"""Tool handlers.

Handlers take the remote client and a validated input model and return a plain
value or raise; the registry wraps them in the error envelope.
"""
