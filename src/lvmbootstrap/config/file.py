# -*- coding: utf-8 -*-

from configparser import ConfigParser
import logging
import os

from lvmbootstrap.config.base import BootloaderSettings, ConfigBase
from lvmbootstrap.errors import ConfigError
from lvmbootstrap.storage.parser import DEFAULT_SEPARATOR


class FileConfig(ConfigBase):
	"""
	Installation recipe read from an ini file. Keyword arguments override the file (e.g. ``target_root`` given on
	the command line).
	"""

	def __init__(self, file, **kwargs):
		super(FileConfig, self).__init__(**kwargs)
		file = os.path.abspath(file)
		if not os.path.exists(file):
			raise ConfigError("Recipe %s does not exist" % file)

		parser = self._make_parser()
		parser.read(file)

		# if this file has an 'inherit' setting in DEFAULT, build a list of
		# filenames and re-read the configuration (-> create a new parser)
		inherits = parser.get('DEFAULT', 'inherit', fallback=None)
		if inherits:
			files = [f if os.path.isabs(f) else os.path.join(os.path.dirname(file), f) for f in inherits.split(' ')]
			files.append(file)
			logging.debug("Files to read after expanding 'inherit': %s" % ', '.join(files))
			parser = self._make_parser()
			parser.read(files)

		self.parser = parser

	def _make_parser(self):
		parser = ConfigParser(interpolation=None)
		# this lambda makes the keys in sections case-sensitive
		parser.optionxform = lambda option: option
		return parser

	def _make_list(self, value):
		return [x.strip() for x in value.split(',') if x.strip()]

	def _get_value(self, section, option, default=None):
		return self.parser.get(section, option) \
				if self.parser.has_option(section, option) \
				else default

	def _section_to_list(self, section):
		"""
		Turns a single section of the configuration file into an iterable of (key, value).
		If the section does not exist, an empty list is returned.
		"""
		if not self.parser.has_section(section):
			return []

		return [(k, v) for k, v in self.parser.items(section) if k != 'inherit' and k not in self.parser.defaults()]

	@property
	def target_root(self):
		return super(FileConfig, self).target_root or self._get_value('installer', 'target_root') or None

	@property
	def separator(self):
		return self._get_value('installer', 'separator', DEFAULT_SEPARATOR)

	@property
	def physical_volumes(self):
		return self._make_list(self._get_value('lvm', 'physical_volumes', ''))

	@property
	def volume_groups(self):
		"""List of (name, [device, ...]) for every volume group in the recipe"""
		vgs = []
		for name in self._make_list(self._get_value('lvm', 'volume_groups', '')):
			section = "vg_%s" % name
			if not self.parser.has_section(section):
				raise ConfigError("Volume group '%s' not configured!" % name)
			vgs.append((name, self._make_list(self._get_value(section, 'physical_volumes', ''))))
		return vgs

	@property
	def resizes(self):
		"""List of (device, gigabytes) where gigabytes is None for 'grow to device size'"""
		resizes = []
		for device, value in self._section_to_list('resize'):
			if value.strip().lower() in ('', 'max'):
				resizes.append((device, None))
				continue
			try:
				resizes.append((device, float(value)))
			except ValueError:
				raise ConfigError("Illegal size '%s' for %s" % (value, device))
		return resizes

	@property
	def has_bootloader(self):
		return self.parser.has_section('bootloader')

	@property
	def bootloader(self):
		if not self.has_bootloader:
			return None

		return BootloaderSettings(self.parser.get('bootloader', 'firmware'),
								  self.parser.get('bootloader', 'device'),
								  self._get_value('bootloader', 'boot_directory', '/boot'),
								  self._get_value('bootloader', 'output', '/boot/grub/grub.cfg'),
								  self._make_list(self._get_value('bootloader', 'scripts', '')))

	@property
	def grub_settings(self):
		return self._section_to_list('grub')
