# -*- coding: utf-8 -*-

import pytest

from lvmbootstrap.errors import AmbiguousReferenceError
from lvmbootstrap.storage.records import PhysicalVolume, VolumeGroup, resolve_identity


class TestResolveIdentity(object):

	def test_string(self):
		assert resolve_identity('/dev/sdb1') == '/dev/sdb1'
		assert resolve_identity(' /dev/sdb1 ') == '/dev/sdb1'

	def test_records(self):
		assert resolve_identity(PhysicalVolume('/dev/sdb1', '10g', '10g')) == '/dev/sdb1'
		assert resolve_identity(VolumeGroup('data', '10g', '10g', ['/dev/sdb1'])) == 'data'

	def test_single_element_sequence(self):
		assert resolve_identity(['/dev/sdb1']) == '/dev/sdb1'
		assert resolve_identity((PhysicalVolume('/dev/sdb1', '10g', '10g'), )) == '/dev/sdb1'

	def test_ambiguous(self):
		for ref in ['', '   ', '/dev/sdb1 /dev/sdc1', [], ['/dev/sdb1', '/dev/sdc1'], None, 42]:
			with pytest.raises(AmbiguousReferenceError):
				resolve_identity(ref)


class TestRecords(object):

	def test_physical_volume(self):
		pv = PhysicalVolume('/dev/sdb1', '10.00g', '<2.50g', vg_name='')
		assert pv.vg_name is None
		assert pv.size_gb == 10.0
		assert pv == PhysicalVolume('/dev/sdb1', '10g', '2.5g')
		assert pv != PhysicalVolume('/dev/sdb1', '10g', '2.5g', vg_name='data')
		assert '/dev/sdb1' in repr(pv)

	def test_volume_group(self):
		vg = VolumeGroup('data', '20g', '20g', ['/dev/sdb1', '/dev/sdc1'])
		assert vg.size_gb == 20.0
		assert vg.pv_names == ['/dev/sdb1', '/dev/sdc1']
		assert VolumeGroup('data', '20g', '20g').pv_names == []
