from __future__ import annotations


class ConfigurationError(ValueError):
	"""Raised when a required credential or setting is missing.

	This is never recovered locally: the action that needed the credential is aborted.
	"""
