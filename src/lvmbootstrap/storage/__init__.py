# -*- coding: utf-8 -*-
from lvmbootstrap.storage.lvm import VolumeManager
from lvmbootstrap.storage.records import PhysicalVolume, VolumeGroup, resolve_identity
