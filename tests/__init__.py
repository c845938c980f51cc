"""Unit tests for discord_message_parser.

Test modules mirror the package layout. Tests use pytest and build their own emoji
tables where exact emoji behavior matters, so results do not depend on the installed
emoji package version.
"""
