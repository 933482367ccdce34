# -*- coding: utf-8 -*-
import logging

from lvmbootstrap.actions.base import StorageActionBase
from lvmbootstrap.errors import DeviceNotFoundError


class CreatePhysicalVolumesAction(StorageActionBase):

	def test(self):
		clashes = []
		for device in self.config.physical_volumes:
			try:
				self.manager.find_pvs(device, quiet=True)
			except DeviceNotFoundError:
				continue
			logging.error("%s is already a physical volume" % device)
			clashes.append(device)
		return not clashes

	def execute(self):
		logging.info("Creating physical volumes...")
		for device in self.config.physical_volumes:
			self.manager.create_pv(device)


class ResizePhysicalVolumesAction(StorageActionBase):

	def test(self):
		return True

	def execute(self):
		if not self.config.resizes:
			return

		logging.info("Resizing physical volumes...")
		for device, size in self.config.resizes:
			self.manager.resize_pv(device, size)


class CreateVolumeGroupsAction(StorageActionBase):

	def test(self):
		existing = set(vg.name for vg in self.manager.list_vgs())
		clashes = [name for name, devices in self.config.volume_groups if name in existing]
		for name in clashes:
			logging.error("Volume group '%s' already exists" % name)
		return not clashes

	def execute(self):
		logging.info("Creating volume groups...")
		pvs = dict((pv.name, pv) for pv in self.manager.list_pvs())

		for name, devices in self.config.volume_groups:
			# hand over the fresh records where lvm knows the device already
			self.manager.create_vg(name, *[pvs.get(d, d) for d in devices])

		for vg in self.manager.list_vgs():
			logging.info("  {:<16} {:>10.2f}G  {}".format(vg.name, vg.size_gb, ', '.join(vg.pv_names)))
