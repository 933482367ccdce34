# -*- coding: utf-8 -*-
from lvmbootstrap.errors import AmbiguousReferenceError
from lvmbootstrap.size import Size


class PhysicalVolume(object):
	"""
	Snapshot of an LVM physical volume as reported by ``pvs``. ``vg_name`` is None for an unassigned PV.
	"""

	def __init__(self, name, size, free, vg_name=None):
		self.name = name
		self.size = Size(size)
		self.free = Size(free)
		self.vg_name = vg_name or None

	@property
	def size_gb(self):
		return self.size.gigabytes

	@property
	def free_gb(self):
		return self.free.gigabytes

	@property
	def is_assigned(self):
		return self.vg_name is not None

	def __eq__(self, other):
		return isinstance(other, PhysicalVolume) and \
			(self.name, self.vg_name, self.size, self.free) == (other.name, other.vg_name, other.size, other.free)

	def __repr__(self):
		return "PhysicalVolume(%s, size=%s, free=%s, vg=%s)" % (self.name, self.size, self.free, self.vg_name)


class VolumeGroup(object):
	"""
	Snapshot of an LVM volume group. ``pv_names`` holds the device paths of its members in report order.
	"""

	def __init__(self, name, size, free, pv_names=None):
		self.name = name
		self.size = Size(size)
		self.free = Size(free)
		self.pv_names = list(pv_names or [])

	@property
	def size_gb(self):
		return self.size.gigabytes

	@property
	def free_gb(self):
		return self.free.gigabytes

	def __eq__(self, other):
		return isinstance(other, VolumeGroup) and \
			(self.name, self.size, self.free, self.pv_names) == (other.name, other.size, other.free, other.pv_names)

	def __repr__(self):
		return "VolumeGroup(%s, size=%s, free=%s, pvs=%s)" % (self.name, self.size, self.free, ', '.join(self.pv_names))


def resolve_identity(ref):
	"""
	Turns a volume reference into the identity string lvm understands. ``ref`` may be a PhysicalVolume or
	VolumeGroup record, the raw device path / name, or a one-element list or tuple of either.

	The string is not checked for existence; lvm itself reports unknown devices.
	"""
	if isinstance(ref, (list, tuple)):
		if len(ref) != 1:
			raise AmbiguousReferenceError("Reference resolves to %s volumes, expected exactly one" % len(ref))
		ref = ref[0]

	if isinstance(ref, (PhysicalVolume, VolumeGroup)):
		ref = ref.name

	if not isinstance(ref, str):
		raise AmbiguousReferenceError("Cannot resolve %r to a volume" % (ref, ))

	parts = ref.split()
	if len(parts) != 1:
		raise AmbiguousReferenceError("Reference '%s' resolves to %s volumes, expected exactly one" % (ref, len(parts)))

	return parts[0]
