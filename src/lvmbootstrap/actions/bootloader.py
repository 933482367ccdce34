# -*- coding: utf-8 -*-
import logging

from lvmbootstrap.actions.base import ActionBase
from lvmbootstrap.bootloader.grub import FirmwareType, add_grub_script, grub_install, grub_mkconfig, \
	read_grub_config, write_grub_config


class ConfigureBootloaderAction(ActionBase):

	def __init__(self, config, runner=None):
		super(ConfigureBootloaderAction, self).__init__(config)
		self.runner = runner

	def test(self):
		if not self.config.has_bootloader:
			logging.error("No bootloader configured")
			return False
		return True

	def execute(self):
		settings = self.config.bootloader
		target_root = self.config.target_root
		logging.info("Configuring bootloader: %s" % settings)

		grub_config = read_grub_config(target_root)
		for k, v in self.config.grub_settings:
			grub_config[k] = v
		write_grub_config(target_root, grub_config)

		for script in settings.scripts:
			add_grub_script(target_root, script)

		grub_install(target_root, settings.boot_directory, settings.device,
					FirmwareType.from_name(settings.firmware), runner=self.runner)
		grub_mkconfig(target_root, settings.output, runner=self.runner)
