# -*- coding: utf-8 -*-
import logging
import re

from lvmbootstrap.errors import AlreadyInitializedError, CommandError, DeviceNotFoundError, \
	DuplicateNameError, EmptyMembershipError, ExternalToolError, InsufficientSpaceError, InvalidNameError, \
	ManagerClosedError, ParseError, VolumeInUseError
from lvmbootstrap.runner import CommandRunner
from lvmbootstrap.size import Size
from lvmbootstrap.storage.parser import DEFAULT_SEPARATOR, PV_FIELDS, VG_FIELDS, parse_pvs, parse_vgs
from lvmbootstrap.storage.records import resolve_identity

# messages printed by the lvm2 tools, per error kind
ERROR_PATTERNS = {
	DeviceNotFoundError: [
		r"no device found",
		r"device \S+ not found",
		r"device not found",
		r"failed to find (?:device for )?physical volume",
		r"no pv (?:label )?found",
		r"couldn't find device",
	],
	AlreadyInitializedError: [
		r"can't initialize physical volume",
		r"is already (?:an? )?(?:lvm2? )?(?:physical volume|pv)\b",
		r"already in volume group",
	],
	InsufficientSpaceError: [
		r"cannot resize to \d+ extents as \d+ are allocated",
		r"insufficient free (?:space|extents)",
		r"requested size \S+ exceeds real size",
	],
	VolumeInUseError: [
		r"belongs to volume group",
		r"is used by (?:a )?(?:vg|volume group)",
		r"already in volume group",
	],
	DuplicateNameError: [
		r"a volume group called \S+ already exists",
		r"volume group \S+ already exists",
		r"already exists in filesystem",
	],
	InvalidNameError: [
		r"volume group name .* is invalid",
	],
}

# error kinds each tool can legitimately report, in matching order
OPERATION_ERRORS = {
	'pvcreate': (AlreadyInitializedError, DeviceNotFoundError),
	'pvresize': (InsufficientSpaceError, DeviceNotFoundError),
	'pvremove': (VolumeInUseError, DeviceNotFoundError),
	'vgcreate': (DuplicateNameError, VolumeInUseError, InvalidNameError, DeviceNotFoundError),
}

DEVICE_PATH_RE = re.compile(r'^/[^\s;&|<>$`\'"\\*?()]+$')
VG_NAME_RE = re.compile(r'^[A-Za-z0-9+_.][A-Za-z0-9+_.-]{0,126}$')


def classify(error, command, kinds=None):
	"""
	Turns a CommandError of an lvm tool into the matching LVMError subclass. ``kinds`` overrides the error kinds
	looked for, which default to those of ``command``.
	"""
	if kinds is None:
		kinds = OPERATION_ERRORS.get(command, ())

	for kind in kinds:
		for pattern in ERROR_PATTERNS[kind]:
			if re.search(pattern, error.diagnostic, re.IGNORECASE):
				return kind("%s failed" % command, error.diagnostic)

	return ExternalToolError("%s failed with exit code %s" % (command, error.exit_code), error.diagnostic)


def validate_device_path(device):
	if not DEVICE_PATH_RE.match(device):
		raise DeviceNotFoundError("'%s' is not a device path" % device)
	return device


def validate_vg_name(name):
	if not isinstance(name, str) or not VG_NAME_RE.match(name) or name in ('.', '..'):
		raise InvalidNameError("'%s' is not a valid volume group name" % (name, ))
	return name


class _TargetRootAdapter(logging.LoggerAdapter):

	def process(self, msg, kwargs):
		return "[%s] %s" % (self.extra['target_root'], msg), kwargs


class VolumeManager(object):
	"""
	Manages LVM physical volumes and volume groups on the host or inside ``target_root``.

	The manager keeps no state about volumes: every listing re-queries lvm and returns fresh records. Volume
	references may be given as records or as plain device paths / names.
	"""

	def __init__(self, target_root=None, runner=None, separator=DEFAULT_SEPARATOR):
		self.target_root = target_root or None
		self.runner = runner or CommandRunner(target_root=self.target_root)
		self.separator = separator
		self.log = _TargetRootAdapter(logging.getLogger(__name__), {'target_root': self.target_root or '/'})

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		self.close()

	@property
	def closed(self):
		return self.log is None

	def close(self):
		"""Releases the handle. Volumes created through it are not touched."""
		if self.log is not None:
			self.log.debug("Releasing volume manager")
			self.log = None

	def _run(self, command, *args, errors=None, quiet=False):
		if self.closed:
			raise ManagerClosedError("Volume manager has been closed")

		self.log.debug("Running %s %s" % (command, ' '.join(args)))
		try:
			return self.runner.run(command, *args)
		except CommandError as ex:
			error = classify(ex, command, errors)
			if quiet:
				self.log.debug("%s" % error)
			else:
				self.log.error("%s" % error)
			raise error

	def _device(self, ref):
		return validate_device_path(resolve_identity(ref))

	def _report_args(self, fields):
		return ['--noheadings', '--units', 'g', '--separator', self.separator, '-o', ','.join(fields)]

	def list_pvs(self):
		output = self._run('pvs', *self._report_args(PV_FIELDS))
		try:
			return parse_pvs(output, self.separator)
		except ParseError as ex:
			self.log.error("Could not parse the physical volume report: %s" % ex)
			raise

	def list_vgs(self):
		output = self._run('vgs', *self._report_args(VG_FIELDS))
		try:
			return parse_vgs(output, self.separator)
		except ParseError as ex:
			self.log.error("Could not parse the volume group report: %s" % ex)
			raise

	def find_pvs(self, *pvs, quiet=False):
		"""
		Asks lvm which physical volumes the given references are and returns their names as lvm reports them, so
		aliases like /dev/disk/by-id links come back as the canonical device. Raises DeviceNotFoundError if any
		reference is not a physical volume.
		"""
		return self._find_pvs([self._device(pv) for pv in pvs], quiet=quiet)

	def _find_pvs(self, devices, quiet=False):
		output = self._run('pvs', '--noheadings', '-o', 'pv_name', *devices, errors=(DeviceNotFoundError, ),
						quiet=quiet)
		return [line.strip() for line in output.splitlines() if line.strip()]

	def create_pv(self, device):
		device = self._device(device)

		try:
			known = self._find_pvs([device], quiet=True)
		except DeviceNotFoundError:
			known = []

		if known:
			self.log.error("%s is already the physical volume %s" % (device, known[0]))
			raise AlreadyInitializedError("%s is already a physical volume" % device)

		self.log.info("Creating physical volume on %s" % device)
		self._run('pvcreate', '--yes', device)

	def resize_pv(self, pv, size=None):
		"""
		Resizes a physical volume. Without ``size`` the PV grows to the capacity of its device, otherwise it is
		set to ``size`` gigabytes (rounded to whole MiB), which may shrink it.
		"""
		device = self._device(pv)
		args = ['--yes']

		if size is None:
			self.log.info("Growing physical volume %s to the device size" % device)
		else:
			new_size = Size.from_gigabytes(size)
			if not new_size.bytes:
				raise ValueError("Physical volume size must be at least 1 MiB, got %s" % size)
			self.log.info("Resizing physical volume %s to %s" % (device, new_size))
			args += ['--setphysicalvolumesize', str(new_size)]

		self._run('pvresize', *(args + [device]))

	def remove_pv(self, pv):
		device = self._device(pv)
		self.log.info("Removing physical volume %s" % device)
		self._run('pvremove', '--yes', device)

	def create_vg(self, name, *pvs):
		if not pvs:
			raise EmptyMembershipError("Volume group '%s' needs at least one physical volume" % (name, ))

		name = validate_vg_name(name)
		devices = [self._device(pv) for pv in pvs]

		# vgcreate would silently initialize raw devices
		self._find_pvs(devices)

		self.log.info("Creating volume group %s on %s" % (name, ', '.join(devices)))
		self._run('vgcreate', name, *devices)
