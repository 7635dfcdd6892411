"""Cyber Systems: rule engine and bots for a VIRUS!-style card game."""
