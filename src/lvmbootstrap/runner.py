# -*- coding: utf-8 -*-
import logging
import os

from sh import Command, CommandNotFound, ErrorReturnCode

from lvmbootstrap.errors import CommandError


def _decode(data):
	if data is None:
		return ''
	if isinstance(data, bytes):
		return str(data, encoding='utf-8', errors='replace')
	return str(data)


class CommandRunner(object):
	"""
	Runs external tools on the host or, when ``target_root`` is set, inside a chroot of the target root.
	Output is forced to the C locale so reports can be parsed reliably.
	"""

	def __init__(self, target_root=None, env=None):
		self.target_root = target_root or None
		self.env = dict(os.environ if env is None else env)
		self.env['LC_ALL'] = 'C'

	def command_line(self, command, *args):
		argv = [command] + [str(a) for a in args]
		if self.target_root:
			argv = ['chroot', self.target_root] + argv
		return argv

	def run(self, command, *args):
		argv = self.command_line(command, *args)
		cmdline = ' '.join(argv)
		logging.debug("Executing: %s" % cmdline)

		try:
			cmd = Command(argv[0])
		except CommandNotFound:
			raise CommandError(cmdline, None, "%s: command not found" % argv[0])

		try:
			output = cmd(*argv[1:], _env=self.env)
		except ErrorReturnCode as ex:
			diagnostic = _decode(ex.stderr).strip() or _decode(ex.stdout).strip()
			raise CommandError(cmdline, getattr(ex, 'exit_code', None), diagnostic)

		return _decode(output.stdout if hasattr(output, 'stdout') else output)
