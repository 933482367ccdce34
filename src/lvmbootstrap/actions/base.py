# -*- coding: utf-8 -*-


class ActionBase(object):
	"""
	One step of an installation. Every action is asked to .test() before any action runs, then all actions are
	executed in order.
	"""

	def __init__(self, config):
		self.config = config

	def test(self):
		"""Pre-flight check against the recipe and the current system. Returning False stops the installation before
		anything was changed, so implementations may query but never modify volumes or files.
		"""
		return False

	def execute(self):
		pass


class StorageActionBase(ActionBase):
	"""Action working on volumes through a shared VolumeManager"""

	def __init__(self, config, manager):
		super(StorageActionBase, self).__init__(config)
		self.manager = manager
