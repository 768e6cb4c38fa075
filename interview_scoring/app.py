from __future__ import annotations

"""
CLI entrypoint for the interview scoring tool.

This module builds a git-style subcommand CLI (via argparse) and dispatches
execution to action modules.
"""

import argparse
import logging
import sys
from dotenv import load_dotenv

from interview_scoring.actions.assign import AssignAction
from interview_scoring.actions.import_transcripts import ImportAction
from interview_scoring.actions.report import ReportAction
from interview_scoring.actions.show import ShowAction
from interview_scoring.actions.template import TemplateAction
from interview_scoring.actions.validate import ValidateAction
from interview_scoring.assignment import InvalidSelectionError
from interview_scoring.categories import CategoryError
from interview_scoring.config import DEFAULT_CONFIG_NAME, ConfigError, find_config_path, load_config
from interview_scoring.storage import PersistenceError
from interview_scoring.tokens import PreconditionViolation


def _action_repository():
	"""
	Construct the action registry.

	Returns:
		A mapping from subcommand name to an action instance.
	"""
	actions = [
		TemplateAction(),
		ImportAction(),
		AssignAction(),
		ShowAction(),
		ReportAction(),
		ValidateAction(),
	]
	return {a.name: a for a in actions}


def build_parser() -> argparse.ArgumentParser:
	"""
	Build the top-level argument parser.

	Returns:
		The configured ArgumentParser instance.
	"""
	parser = argparse.ArgumentParser(
		prog="interview-scoring",
		description=(
			"Score autobiographical interviews by assigning detail categories to spans of transcript text."
		),
	)
	parser.add_argument(
		"--verbose",
		"-v",
		action="count",
		default=0,
		help="Log progress details (-v for info, -vv for debug)",
	)

	actions = _action_repository()

	config_parent = argparse.ArgumentParser(add_help=False)
	config_parent.add_argument(
		"--config",
		"-c",
		help=(
			f"Path to {DEFAULT_CONFIG_NAME}. If omitted, ./{DEFAULT_CONFIG_NAME} in the current directory is used."
		),
	)

	subparsers = parser.add_subparsers(dest="action", metavar="COMMAND", required=True)

	for name, action in actions.items():
		parents = [config_parent] if action.requires_config else []
		sub = subparsers.add_parser(name, help=action.help, parents=parents)
		action.add_arguments(sub)
		sub.set_defaults(_action_name=name)

	return parser


def _configure_logging(verbosity: int) -> None:
	level = logging.WARNING
	if verbosity == 1:
		level = logging.INFO
	elif verbosity > 1:
		level = logging.DEBUG

	logging.basicConfig(
		level=level,
		format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
		stream=sys.stderr,
	)


def main(argv: list[str] | None = None) -> int:
	"""
	Run the CLI.

	Args:
		argv:
			Optional argument list (without program name). If omitted, argparse
			reads from sys.argv.

	Returns:
		Process exit code. `0` on success, `2` on configuration, usage or
		project file errors, `3` for not-yet-implemented actions, `4` if a
		selection cannot be assigned without interleaving category runs.
	"""
	load_dotenv()

	parser = build_parser()
	args = parser.parse_args(argv)
	_configure_logging(int(getattr(args, "verbose", 0) or 0))

	try:
		actions = _action_repository()
		action_name = getattr(args, "_action_name", None)
		if not action_name or action_name not in actions:
			parser.error("Unknown or missing command")
			return 2

		action = actions[action_name]

		config = None
		if action.requires_config:
			config_path = find_config_path(getattr(args, "config", None))
			config = load_config(config_path)

		action.run(args, config)
		return 0
	except (ConfigError, PersistenceError, CategoryError, PreconditionViolation) as exc:
		print(f"error: {exc}", file=sys.stderr)
		return 2
	except InvalidSelectionError as exc:
		print(f"invalid selection: {exc}", file=sys.stderr)
		return 4
	except NotImplementedError as exc:
		print(f"not implemented: {exc}", file=sys.stderr)
		return 3


if __name__ == "__main__":
	raise SystemExit(main())
