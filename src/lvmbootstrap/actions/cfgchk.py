# -*- coding: utf-8 -*-
import logging
from configparser import NoOptionError

from lvmbootstrap.actions.base import ActionBase
from lvmbootstrap.bootloader.grub import FirmwareType
from lvmbootstrap.errors import BootloaderError, ConfigError, LVMError
from lvmbootstrap.storage.lvm import validate_device_path, validate_vg_name


class CheckConfigAction(ActionBase):
	"""
	Action to test for configuration errors. This class does not implement the .execute() method as it is
	a test-only action
	"""

	def test(self):
		for attr_name in dir(self.config):
			if attr_name.startswith('_'):
				continue

			try:
				getattr(self.config, attr_name)
			except (NoOptionError, ConfigError) as ex:
				logging.error("Attribute '%s' not defined in configuration: %s" % (attr_name, ex))
				return False

		try:
			for device in self.config.physical_volumes:
				validate_device_path(device)

			for name, devices in self.config.volume_groups:
				validate_vg_name(name)
				if not devices:
					logging.error("Volume group '%s' has no physical volumes" % name)
					return False
				for device in devices:
					validate_device_path(device)

			for device, size in self.config.resizes:
				validate_device_path(device)
		except LVMError as ex:
			logging.error(ex)
			return False

		if self.config.has_bootloader:
			try:
				FirmwareType.from_name(self.config.bootloader.firmware)
			except BootloaderError as ex:
				logging.error(ex)
				return False

		return True
