# -*- coding: utf-8 -*-

import os
import sys
from collections import OrderedDict

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '../src/'))

from lvmbootstrap.errors import CommandError
from lvmbootstrap.size import Size
from lvmbootstrap.storage.lvm import VolumeManager

GiB = 1024 ** 3
EXTENT = 4 * 1024 ** 2


def _fmt(nbytes):
	gb = float(nbytes) / GiB
	rounded = "%.2f" % gb
	prefix = '' if float(rounded) * GiB == nbytes else '<'
	return "%s%sg" % (prefix, rounded)


class FakeLVM(object):
	"""
	Stands in for the CommandRunner. Keeps physical volumes and volume groups in memory and answers like the lvm2
	tools do, including their error messages.
	"""

	def __init__(self, devices=None):
		self.devices = OrderedDict(devices or {})
		# symlinks like /dev/disk/by-id/..., lvm reports the device they point to
		self.aliases = {}
		self.pvs = OrderedDict()
		self.vgs = OrderedDict()
		self.calls = []
		self.outputs = {}

	def _fail(self, command, args, message, exit_code=5):
		raise CommandError(' '.join((command, ) + tuple(args)), exit_code, message)

	def commands(self):
		return [c[0] for c in self.calls]

	def run(self, command, *args):
		self.calls.append((command, ) + args)
		if command in self.outputs:
			return self.outputs[command]
		return getattr(self, '_%s' % command)(list(args))

	def _canonical(self, dev):
		return self.aliases.get(dev, dev)

	def _separator(self, args):
		return args[args.index('--separator') + 1]

	def _pvs(self, args):
		if '--separator' not in args:
			return self._pvs_lookup(args[args.index('-o') + 2:])

		sep = self._separator(args)
		lines = []
		for name, pv in self.pvs.items():
			free = pv['size'] - pv['allocated']
			lines.append("  " + sep.join([name, pv['vg'] or '', _fmt(pv['size']), _fmt(free)]))
		return '\n'.join(lines) + '\n' if lines else ''

	def _pvs_lookup(self, devs):
		found = [self._canonical(d) for d in devs if self._canonical(d) in self.pvs]
		missing = [d for d in devs if self._canonical(d) not in self.pvs]
		if missing:
			self._fail('pvs', devs, '\n'.join("  Failed to find physical volume \"%s\"." % d for d in missing))
		return ''.join("  %s\n" % d for d in found)

	def _vgs(self, args):
		sep = self._separator(args)
		lines = []
		for name, members in self.vgs.items():
			size = sum(self.pvs[m]['size'] for m in members)
			free = sum(self.pvs[m]['size'] - self.pvs[m]['allocated'] for m in members)
			for m in members:
				lines.append("  " + sep.join([name, _fmt(size), _fmt(free), m]))
		return '\n'.join(lines) + '\n' if lines else ''

	def _pvcreate(self, args):
		dev = self._canonical(args[-1])
		if dev not in self.devices:
			self._fail('pvcreate', args, "  No device found for %s." % dev)
		if dev in self.pvs and self.pvs[dev]['vg']:
			self._fail('pvcreate', args, "  Can't initialize physical volume \"%s\" of volume group \"%s\" without -ff\n"
							"  %s: physical volume not initialized." % (dev, self.pvs[dev]['vg'], dev))
		self.pvs[dev] = {'size': self.devices[dev], 'vg': None, 'allocated': 0}
		return "  Physical volume \"%s\" successfully created.\n" % dev

	def _pvresize(self, args):
		dev = self._canonical(args[-1])
		if dev not in self.pvs:
			self._fail('pvresize', args, "  Failed to find physical volume \"%s\"." % dev)

		pv = self.pvs[dev]
		if '--setphysicalvolumesize' in args:
			size = Size(args[args.index('--setphysicalvolumesize') + 1]).bytes
			if size > self.devices[dev]:
				self._fail('pvresize', args, "  %s: Requested size %s exceeds real size %s." % (dev, _fmt(size),
																								_fmt(self.devices[dev])))
			if size < pv['allocated']:
				self._fail('pvresize', args, "  %s: cannot resize to %d extents as %d are allocated." % (
					dev, size // EXTENT, pv['allocated'] // EXTENT))
			pv['size'] = size
		else:
			pv['size'] = self.devices[dev]

		return "  Physical volume \"%s\" changed\n  1 physical volume(s) resized or updated / 0 physical volume(s) " \
				"not resized\n" % dev

	def _pvremove(self, args):
		dev = self._canonical(args[-1])
		if dev not in self.pvs:
			self._fail('pvremove', args, "  No PV found on device %s." % dev)
		if self.pvs[dev]['vg']:
			self._fail('pvremove', args, "  PV %s is used by VG %s so please use vgreduce first.\n"
							"  (If you are certain you need pvremove, then confirm by using --force twice.)" % (
								dev, self.pvs[dev]['vg']))
		del self.pvs[dev]
		return "  Labels on physical volume \"%s\" successfully wiped.\n" % dev

	def _vgcreate(self, args):
		name, devs = args[0], [self._canonical(d) for d in args[1:]]
		if name in self.vgs:
			self._fail('vgcreate', args, "  A volume group called %s already exists." % name)
		for dev in devs:
			if dev not in self.devices:
				self._fail('vgcreate', args, "  No device found for %s." % dev)
			if dev in self.pvs and self.pvs[dev]['vg']:
				self._fail('vgcreate', args, "  Physical volume '%s' is already in volume group '%s'" % (
					dev, self.pvs[dev]['vg']))
		for dev in devs:
			self.pvs.setdefault(dev, {'size': self.devices[dev], 'vg': None, 'allocated': 0})['vg'] = name
		self.vgs[name] = list(devs)
		return "  Volume group \"%s\" successfully created\n" % name


@pytest.fixture
def lvm():
	return FakeLVM({
		'/dev/loop0p1': 25 * GiB,
		'/dev/loop0p2': 75 * GiB - 512,
		'/dev/loop1': 10 * GiB,
	})


@pytest.fixture
def manager(lvm):
	with VolumeManager(runner=lvm) as m:
		yield m
