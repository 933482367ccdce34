# -*- coding: utf-8 -*-


class ConfigBase(object):

	def __init__(self, **kwargs):
		self._target_root = kwargs.get('target_root')

	@property
	def target_root(self):
		return self._target_root or None


class BootloaderSettings(object):

	def __init__(self, firmware, device, boot_directory='/boot', output='/boot/grub/grub.cfg', scripts=None):
		self.firmware = firmware
		self.device = device
		self.boot_directory = boot_directory
		self.output = output
		self.scripts = scripts or []

	def __repr__(self):
		return "%s on %s (boot directory %s)" % (self.firmware, self.device, self.boot_directory)
