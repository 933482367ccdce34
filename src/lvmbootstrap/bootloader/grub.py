# -*- coding: utf-8 -*-
import logging
import os
import shutil
from collections import OrderedDict

from lvmbootstrap.errors import BootloaderError, CommandError
from lvmbootstrap.runner import CommandRunner

GRUB_DEFAULTS = '/etc/default/grub'
GRUB_SCRIPTS_DIR = '/etc/grub.d'


class FirmwareType(object):
	BIOS = 'i386-pc'
	EFI = 'x86_64-efi'

	@classmethod
	def from_name(cls, name):
		targets = {'bios': cls.BIOS, 'efi': cls.EFI, 'uefi': cls.EFI}
		if name in (cls.BIOS, cls.EFI):
			return name
		try:
			return targets[name.lower()]
		except KeyError:
			raise BootloaderError("Unknown firmware type '%s'" % name)


def _path(target_root, path):
	return os.path.join(target_root or '/', path.lstrip('/'))


def read_grub_config(target_root):
	"""
	Reads the GRUB defaults of ``target_root`` into an ordered dict. Each line is split at its first '=', later
	assignments of a key win. A missing file yields an empty configuration.
	"""
	grub_file = _path(target_root, GRUB_DEFAULTS)
	config = OrderedDict()

	if not os.path.exists(grub_file):
		logging.debug("%s does not exist yet" % grub_file)
		return config

	try:
		with open(grub_file, 'r') as f:
			content = f.read()
	except OSError as ex:
		raise BootloaderError("Failed to read GRUB config file: %s" % ex)

	for line in content.split('\n'):
		if '=' not in line:
			continue
		k, v = line.split('=', 1)
		config[k] = v

	return config


def write_grub_config(target_root, config):
	grub_file = _path(target_root, GRUB_DEFAULTS)
	logging.debug("Writing %s" % grub_file)

	try:
		with open(grub_file, 'w') as f:
			for k, v in config.items():
				f.write("%s=%s\n" % (k, v))
		os.chmod(grub_file, 0o644)
	except OSError as ex:
		raise BootloaderError("Failed to write GRUB config file: %s" % ex)


def add_grub_script(target_root, script_path):
	"""Copies the host's ``script_path`` to the same location inside ``target_root``"""
	if not os.path.exists(script_path):
		raise BootloaderError("Error adding GRUB script: %s does not exist" % script_path)

	target_path = _path(target_root, script_path)
	logging.debug("Installing GRUB script %s to %s" % (script_path, target_path))

	try:
		shutil.copyfile(script_path, target_path)
		# grub only runs executable scripts
		os.chmod(target_path, 0o755)
	except OSError as ex:
		raise BootloaderError("Failed to write GRUB script to %s: %s" % (target_path, ex))


def remove_grub_script(target_root, script_name):
	target_path = _path(target_root, os.path.join(GRUB_SCRIPTS_DIR, script_name))

	if not os.path.exists(target_path):
		raise BootloaderError("Error removing GRUB script: %s does not exist" % target_path)

	try:
		os.remove(target_path)
	except OSError as ex:
		raise BootloaderError("Error removing GRUB script: %s" % ex)


def grub_install(target_root, boot_directory, disk, target, runner=None):
	runner = runner or CommandRunner(target_root=target_root)
	logging.info("Installing GRUB (%s) on %s" % (target, disk))
	try:
		runner.run('grub-install', '--boot-directory', boot_directory, '--target=%s' % target, disk)
	except CommandError as ex:
		raise BootloaderError("Failed to run grub-install: %s" % ex)


def grub_mkconfig(target_root, output, runner=None):
	runner = runner or CommandRunner(target_root=target_root)
	logging.info("Generating %s" % output)
	try:
		runner.run('grub-mkconfig', '-o', output)
	except CommandError as ex:
		raise BootloaderError("Failed to run grub-mkconfig: %s" % ex)
