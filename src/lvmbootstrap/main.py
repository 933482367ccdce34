#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import logging
from argparse import ArgumentParser
import traceback

from lvmbootstrap.actions.bootloader import ConfigureBootloaderAction
from lvmbootstrap.actions.cfgchk import CheckConfigAction
from lvmbootstrap.actions.storage import CreatePhysicalVolumesAction, CreateVolumeGroupsAction, \
	ResizePhysicalVolumesAction
from lvmbootstrap.config.file import FileConfig
from lvmbootstrap.errors import ConfigError, LVMError
from lvmbootstrap.storage.lvm import VolumeManager


class Bootstrap(object):

	def __init__(self, config, manager=None, runner=None):
		self.config = config
		self.manager = manager
		self.runner = runner

	def check(self, actions):
		logging.debug("Executing pre-flight checks...")

		for action in actions:
			if not action.test():
				logging.error("Action '%s' failed to pass pre-execution tests" % action.__class__.__name__)
				return False

		return True

	def actions(self, manager, bootloader=True):
		actions = [
			CheckConfigAction(self.config),
			CreatePhysicalVolumesAction(self.config, manager),
			ResizePhysicalVolumesAction(self.config, manager),
			CreateVolumeGroupsAction(self.config, manager),
		]

		if bootloader and self.config.has_bootloader:
			actions.append(ConfigureBootloaderAction(self.config, runner=self.runner))
		else:
			logging.info("Skipping bootloader configuration")

		return actions

	def execute(self, bootloader=True):
		"""Runs all actions. Returns True if every action succeeded."""
		manager = self.manager or VolumeManager(target_root=self.config.target_root, separator=self.config.separator)

		try:
			actions = self.actions(manager, bootloader=bootloader)

			if not self.check(actions):
				return False

			logging.info("Pre-execution tests passed. Starting installation")
			logging.info("Actions: %s" % (', '.join([x.__class__.__name__ for x in actions])))

			for action in actions:
				action.execute()

			return True
		except Exception as e:
			logging.error(e)
			logging.error(traceback.format_exc())
			return False
		finally:
			manager.close()


def print_inventory(manager, out=None):
	out = out or sys.stdout
	out.write("{:<24} {:<16} {:>10} {:>10}\n".format("PV", "VG", "Size", "Free"))
	for pv in manager.list_pvs():
		out.write("{:<24} {:<16} {:>9.2f}G {:>9.2f}G\n".format(pv.name, pv.vg_name or '-', pv.size_gb, pv.free_gb))

	out.write("\n{:<16} {:>10} {:>10}  {}\n".format("VG", "Size", "Free", "PVs"))
	for vg in manager.list_vgs():
		out.write("{:<16} {:>9.2f}G {:>9.2f}G  {}\n".format(vg.name, vg.size_gb, vg.free_gb, ', '.join(vg.pv_names)))


def main(argv=None):
	parser = ArgumentParser()

	parser.add_argument('-c', '--config', help="The installation recipe")
	parser.add_argument('-t', '--target-root', help="Run all commands chrooted into TARGET_ROOT")
	parser.add_argument('-v', '--verbose', action="count", default=3)
	parser.add_argument('--no-bootloader', action='store_true', help="Only set up the volumes, skip the bootloader")
	parser.add_argument('--list', action='store_true', help="Print the current physical volumes and volume groups")

	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.FATAL - (10 * args.verbose),
						format='%(asctime)s %(levelname)-7s %(message)s')

	if args.list:
		try:
			with VolumeManager(target_root=args.target_root) as manager:
				print_inventory(manager)
		except LVMError as ex:
			logging.error(ex)
			return 1
		return 0

	if not args.config:
		parser.error("the following arguments are required: -c/--config")

	try:
		cfg = FileConfig(args.config, target_root=args.target_root)
	except ConfigError as ex:
		logging.error(ex)
		return 1

	return 0 if Bootstrap(cfg).execute(bootloader=not args.no_bootloader) else 1


if __name__ == "__main__":
	sys.exit(main())
