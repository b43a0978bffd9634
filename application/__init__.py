"""
Application layer for the timer engine.

Contains the ports (interfaces) the engine depends on and the
application-level exceptions shared by the engine, adapters and API.
"""
