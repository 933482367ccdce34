# -*- coding: utf-8 -*-


class LVMError(Exception):
	"""
	Base class for all volume management errors. ``diagnostic`` holds the text the underlying lvm tool printed,
	if any.
	"""

	def __init__(self, message, diagnostic=''):
		super(LVMError, self).__init__(message)
		self.diagnostic = diagnostic or ''

	def __str__(self):
		message = super(LVMError, self).__str__()
		if self.diagnostic:
			return "%s: %s" % (message, self.diagnostic)
		return message


class DeviceNotFoundError(LVMError):
	pass


class AlreadyInitializedError(LVMError):
	pass


class AmbiguousReferenceError(LVMError):
	pass


class InsufficientSpaceError(LVMError):
	pass


class VolumeInUseError(LVMError):
	pass


class DuplicateNameError(LVMError):
	pass


class EmptyMembershipError(LVMError):
	pass


class InvalidNameError(LVMError):
	pass


class ParseError(LVMError):
	"""Raised when an lvm report cannot be turned into records. Never accompanied by partial results."""


class ExternalToolError(LVMError):
	"""Any tool failure that does not map to one of the other error kinds."""


class ManagerClosedError(LVMError):
	pass


class CommandError(Exception):

	def __init__(self, command, exit_code, diagnostic):
		super(CommandError, self).__init__("'%s' failed with exit code %s: %s" % (command, exit_code, diagnostic))
		self.command = command
		self.exit_code = exit_code
		self.diagnostic = diagnostic


class BootloaderError(Exception):
	pass


class ConfigError(Exception):
	pass
