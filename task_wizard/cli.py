"""
CLI Interface for the Construction Task Wizard

Runs the intake conversation in the terminal, shows the ranked plan,
lets the user pick which tasks to create and optionally commits them
to the task store.
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import Optional

from .agents.task_wizard_agent import TaskWizardAgent
from .builders.task_store import TaskStoreError, create_task_store_client, seed_from_project
from .config import WizardConfig, load_config
from .logging_config import setup_logging
from .planning.estimator import summarize_effort
from .planning.task_generator import generate_milestone_tasks
from .schemas.answers import MessageRole, ProjectType
from .schemas.generated_task import GeneratedTask


logger = logging.getLogger(__name__)


def print_header():
    """Print CLI header."""
    print("""
╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║     CONSTRUCTION TASK WIZARD                                  ║
║                                                               ║
║     Quick intake → prioritized, estimated task plan           ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝
    """)


def _print_new_messages(agent: TaskWizardAgent, shown: int) -> int:
    """Print assistant messages added since `shown`; returns the new count."""
    transcript = agent.transcript
    for message in transcript[shown:]:
        if message.role != MessageRole.ASSISTANT:
            continue
        print(f"\n{message.text}")
        options = message.meta.get("options")
        if options:
            for i, option in enumerate(options, 1):
                print(f"  {i}. {option}")
    return len(transcript)


def _resolve_option(response: str, options: tuple) -> Optional[str]:
    """Map a typed option number onto the option text."""
    if options and response.isdigit():
        index = int(response) - 1
        if 0 <= index < len(options):
            return options[index]
    return None


def format_task_line(number: int, task: GeneratedTask, included: bool) -> str:
    if task.is_completed:
        mark = "[done]"
    else:
        mark = "[x]" if included else "[ ]"
    due = task.due_date or "-"
    return (
        f"  {number:>3}. {mark:<6} {task.title}"
        f"  ({task.priority}, {task.estimated_hours:g}h, due {due})"
    )


def print_plan(agent: TaskWizardAgent):
    """Print the ranked plan with include marks."""
    selection = agent.selection
    print(f"\n{'═'*60}")
    print(f"PLAN: {len(agent.tasks)} tasks, ~{agent.estimated_weeks} weeks")
    print(f"{'═'*60}")
    for i, task in enumerate(agent.tasks, 1):
        print(format_task_line(i, task, selection.is_included(task.title)))

    summary = summarize_effort(selection.included_tasks())
    print(f"{'─'*60}")
    print(
        f"Selected: {summary['pending_count']} tasks, "
        f"{summary['pending_pert_hours']:g}h, ~{summary['estimated_weeks']} weeks"
    )


def toggle_tasks(agent: TaskWizardAgent, entries: str) -> list[str]:
    """
    Flip the include flag for each task number in a comma-separated list.

    Returns a list of problems (bad numbers, completed tasks) to show the user.
    """
    problems = []
    tasks = agent.tasks
    for entry in entries.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if not entry.isdigit() or not 1 <= int(entry) <= len(tasks):
            problems.append(f"No task numbered {entry}")
            continue
        task = tasks[int(entry) - 1]
        try:
            agent.selection.set_included(task.title, not agent.selection.is_included(task.title))
        except ValueError as e:
            problems.append(str(e))
    return problems


def run_interactive_interview(agent: TaskWizardAgent, output_dir: str) -> bool:
    """
    Run the intake conversation in the terminal.

    Returns True once the wizard is ready, False if the user quit.
    """
    shown = _print_new_messages(agent, 0)
    print(agent.get_status_display())

    while not agent.is_ready:
        slot = agent.get_next_question()
        response = input("\nYour response: ").strip()

        if response.lower() == 'status':
            print(agent.get_status_display())
            continue

        if response.lower() == 'quit':
            filepath = agent.save_session(output_dir)
            print(f"\nSession saved to: {filepath}")
            return False

        option = _resolve_option(response, slot.options)
        if option is not None:
            agent.submit_answer(chosen_options=[option])
        else:
            agent.submit_answer(response)
        shown = _print_new_messages(agent, shown)

    return True


def review_plan(agent: TaskWizardAgent):
    """Let the user toggle tasks until they press Enter."""
    if not agent.tasks:
        return
    while True:
        print_plan(agent)
        entries = input("\nToggle tasks by number (e.g. 3,7), or press Enter to continue: ").strip()
        if not entries:
            return
        for problem in toggle_tasks(agent, entries):
            print(f"  ! {problem}")


def commit_selection(agent: TaskWizardAgent, config: WizardConfig, project_id: Optional[str]) -> int:
    """Create the selected tasks. Returns a process exit code."""
    if not project_id:
        print("\nError: --project-id is required to commit tasks")
        return 1

    client = create_task_store_client(
        config.task_store_url,
        config.task_store_token,
        config.task_store_timeout,
    )
    if client is None:
        print("\nError: TASK_STORE_URL is not set; cannot commit tasks")
        return 1

    result = asyncio.run(agent.selection.commit(client.create_task_async, project_id))

    print(f"\nCreated {result.created_count} tasks, {result.failed_count} failed.")
    for error in result.errors:
        print(f"  ! {error}")
    return 0 if result.failed_count == 0 else 2


def _seed_from_args(args: argparse.Namespace, config: WizardConfig) -> dict:
    seed: dict = {}
    if args.project_id and config.task_store_configured:
        client = create_task_store_client(
            config.task_store_url,
            config.task_store_token,
            config.task_store_timeout,
        )
        try:
            seed.update(seed_from_project(client.get_project(args.project_id)))
        except TaskStoreError as e:
            logger.warning("Could not load project %s: %s", args.project_id, e)
            print(f"Warning: could not load project {args.project_id}; starting fresh.")

    for key in ("project_name", "project_type", "description", "start_date", "end_date"):
        value = getattr(args, key)
        if value:
            seed[key] = value
    return seed


def cmd_interview(args: argparse.Namespace, config: WizardConfig) -> int:
    output_dir = args.output_dir or config.output_dir
    agent = TaskWizardAgent(
        seed=_seed_from_args(args, config),
        project_id=args.project_id,
    )

    if not run_interactive_interview(agent, output_dir):
        return 0

    if agent.generation_error:
        filepath = agent.save_session(output_dir)
        print(f"\nSession saved to: {filepath}")
        return 1

    review_plan(agent)

    filepath = agent.save_session(output_dir)
    print(f"\nSession saved to: {filepath}")

    if args.commit:
        return commit_selection(agent, config, args.project_id)
    return 0


def cmd_milestones(args: argparse.Namespace, config: WizardConfig) -> int:
    as_of = date.fromisoformat(args.as_of) if args.as_of else date.today()
    tasks = generate_milestone_tasks(args.completion, as_of)
    if not tasks:
        print(f"No milestone tasks at {args.completion}% completion.")
        return 0

    print(f"Milestone tasks at {args.completion}% completion:\n")
    for i, task in enumerate(tasks, 1):
        print(f"  {i}. {task.title}")
        print(f"     {task.description}")
        print(f"     Priority: {task.priority}  Hours: {task.estimated_hours:g}  Due: {task.due_date}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Construction Task Wizard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start a new interactive intake
  task-wizard interview --project-name "Maple Street Duplex"

  # Seed from an existing project and create the chosen tasks
  task-wizard interview --project-id 42 --commit

  # Show the tasks triggered at 50% completion
  task-wizard milestones --completion 50
        """
    )
    subparsers = parser.add_subparsers(dest="command")

    interview = subparsers.add_parser("interview", help="Run the intake conversation")
    interview.add_argument("--project-name", "-n", dest="project_name", help="Project name")
    interview.add_argument(
        "--project-type", "-t",
        dest="project_type",
        choices=[t.value for t in ProjectType],
        help="Project type"
    )
    interview.add_argument("--description", "-d", help="Short project description")
    interview.add_argument("--start-date", dest="start_date", help="Start date (YYYY-MM-DD)")
    interview.add_argument("--end-date", dest="end_date", help="Target completion date (YYYY-MM-DD)")
    interview.add_argument("--project-id", "-p", dest="project_id", help="Task store project id")
    interview.add_argument(
        "--commit",
        action="store_true",
        help="Create the selected tasks in the task store"
    )
    interview.add_argument(
        "--output-dir", "-o",
        dest="output_dir",
        help="Where to save the session (default: WIZARD_OUTPUT_DIR or ./outputs)"
    )

    milestones = subparsers.add_parser("milestones", help="List milestone-triggered tasks")
    milestones.add_argument(
        "--completion", "-c",
        type=int,
        required=True,
        help="Project completion percentage"
    )
    milestones.add_argument("--as-of", dest="as_of", help="Reference date (default: today)")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.log_level, config.log_format)

    if args.command is None:
        parser.print_help()
        return 1

    print_header()

    if args.command == "interview":
        return cmd_interview(args, config)
    return cmd_milestones(args, config)


if __name__ == "__main__":
    sys.exit(main())
