# -*- coding: utf-8 -*-

import re


class Size(object):
	"""
	A size in bytes. Accepts LVM's suffixed figures ("10.00g", "<9.99g", "512m") where every unit is a power
	of 1024, regardless of case.
	"""
	suffixes = ['k', 'm', 'g', 't', 'p', 'e']

	def __init__(self, size=0):
		if isinstance(size, bool):
			raise ValueError("Illegal size specification: %r" % size)
		elif isinstance(size, int):
			self.bytes = size
		elif isinstance(size, float):
			self.bytes = int(round(size))
		elif isinstance(size, str):
			self.bytes = self.parse(size)
		elif isinstance(size, Size):
			self.bytes = size.bytes
		else:
			raise ValueError("Illegal size specification: %r" % size)

		if self.bytes < 0:
			raise ValueError("Size cannot be smaller than 0 bytes")

	@classmethod
	def from_gigabytes(cls, gigabytes):
		"""Size of ``gigabytes`` GiB, rounded to whole MiB"""
		mib = int(round(float(gigabytes) * 1024))
		if mib < 0:
			raise ValueError("Size cannot be smaller than 0 bytes")
		return cls(mib * 1024 ** 2)

	def parse(self, s):
		# lvm prefixes rounded figures with < or >
		m = re.match(r'^[<>]?\s*(\d+(?:\.\d+)?)\s*([bskmgtpe]?)$', s.strip(), re.IGNORECASE)

		if not m:
			raise ValueError("Illegal size specification: %s" % s)

		suffix = m.group(2).lower() if m.group(2) else None

		multi = 1
		if suffix == 's':
			multi = 512
		elif suffix and suffix != 'b':
			multi = 1024 ** (self.suffixes.index(suffix)+1)

		return int(round(float(m.group(1)) * multi))

	@property
	def gigabytes(self):
		return float(self.bytes) / 1024 ** 3

	def __eq__(self, other):
		return isinstance(other, Size) and self.bytes == other.bytes

	def __lt__(self, other):
		return self.bytes < Size(other).bytes

	def __add__(self, other):
		return Size(self.bytes + Size(other).bytes)

	__radd__ = __add__

	def __hash__(self):
		return hash(self.bytes)

	def __repr__(self):
		return "Size(%s)" % self

	def __str__(self):
		if not self.bytes:
			return str(self.bytes)

		for i, u in reversed(list(enumerate(self.suffixes))):
			x = float(self.bytes) / (1024 ** (i+1))
			if x == int(x):
				return "%s%s" % (int(x), u.upper())

		return "%sB" % self.bytes
