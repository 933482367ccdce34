# -*- coding: utf-8 -*-
from collections import OrderedDict

from lvmbootstrap.errors import ParseError
from lvmbootstrap.size import Size
from lvmbootstrap.storage.records import PhysicalVolume, VolumeGroup

DEFAULT_SEPARATOR = '|'

PV_FIELDS = ('pv_name', 'vg_name', 'pv_size', 'pv_free')
VG_FIELDS = ('vg_name', 'vg_size', 'vg_free', 'pv_name')


def parse_report(text, fields, separator=DEFAULT_SEPARATOR):
	"""
	Splits the output of an lvm reporting command (run with ``--noheadings --separator``) into one dict per line.
	Every line must carry exactly one column per field, otherwise the whole report is rejected.
	"""
	if not separator:
		raise ValueError("A report separator is required")

	rows = []
	for lineno, line in enumerate(text.splitlines(), 1):
		line = line.strip()
		if not line:
			continue

		columns = [c.strip() for c in line.split(separator)]
		if len(columns) != len(fields):
			raise ParseError("Line %s of the report has %s fields, expected %s" % (lineno, len(columns), len(fields)),
							line)

		rows.append(dict(zip(fields, columns)))

	return rows


def parse_size(value):
	try:
		return Size(value)
	except ValueError:
		raise ParseError("Illegal size '%s' in report" % value, value)


def parse_pvs(text, separator=DEFAULT_SEPARATOR):
	pvs = []
	for row in parse_report(text, PV_FIELDS, separator):
		if not row['pv_name']:
			raise ParseError("Physical volume without a device name in report", separator.join(row.values()))

		pvs.append(PhysicalVolume(row['pv_name'],
								parse_size(row['pv_size']),
								parse_size(row['pv_free']),
								vg_name=row['vg_name']))
	return pvs


def parse_vgs(text, separator=DEFAULT_SEPARATOR):
	"""
	Parses a ``vgs`` report with one row per (volume group, physical volume) pair and folds the rows into one
	VolumeGroup per name, keeping the order of first appearance.
	"""
	vgs = OrderedDict()

	for row in parse_report(text, VG_FIELDS, separator):
		name = row['vg_name']
		if not name:
			raise ParseError("Volume group without a name in report", separator.join(row.values()))

		size = parse_size(row['vg_size'])
		free = parse_size(row['vg_free'])

		vg = vgs.get(name)
		if vg is None:
			vg = vgs[name] = VolumeGroup(name, size, free)
		elif vg.size != size or vg.free != free:
			raise ParseError("Conflicting sizes reported for volume group '%s'" % name, separator.join(row.values()))

		if row['pv_name'] and row['pv_name'] not in vg.pv_names:
			vg.pv_names.append(row['pv_name'])

	return list(vgs.values())
