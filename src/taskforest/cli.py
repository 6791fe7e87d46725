"""
Command Line Interface for taskforest.

Read-only inspection of a task snapshot file: the rendered forest, the
relationships of one task, and whether a parent change would be legal.
"""

import sys
import click
from .version import VERSION
from .io import load_tasks
from .index import HierarchyIndex
from .tree import build_forest, flatten_forest, ExpandState
from .validator import RelationshipValidator
from .settings import HierarchySettings
from .recovery import HierarchyError, RecoverableError
from pydantic import ValidationError


def _load(file):
    try:
        return load_tasks(file)
    except HierarchyError as e:
        raise click.ClickException(str(e)) from e


def _settings():
    try:
        return HierarchySettings.from_env()
    except ValidationError as e:
        raise click.ClickException(f"Invalid TASKFOREST_* setting: {e}") from e


def _label(task):
    title = task.attributes.get('title')
    return f"{task.id} - {title}" if title else task.id


@click.group()
@click.version_option(version=VERSION, prog_name="taskforest")
def main():
    """
    taskforest - hierarchy tools for flat task collections.

    Every command reads a YAML or JSON snapshot holding a list of tasks with
    optional parent references.
    """
    pass


@main.command()
@click.argument('file', type=click.Path(dir_okay=False))
@click.option('--collapsed', is_flag=True, default=False, help='Start with every task collapsed')
@click.option('-e', '--expand', 'expand_ids', multiple=True, help='Expand a task (repeatable)')
def show(file, collapsed, expand_ids):
    """Print the task tree in display order."""
    tasks = _load(file)
    settings = _settings()
    forest = build_forest(tasks)
    index = HierarchyIndex(tasks)

    state = ExpandState(expand_ids)
    if settings.expand_all_by_default and not collapsed:
        state.expand_all(forest)

    if not forest:
        click.echo("📭 No tasks found")
        return

    for node in flatten_forest(forest, state):
        marker = ("▾" if node.id in state else "▸") if node.children else "•"
        line = f"{'  ' * node.depth}{marker} {_label(node.task)}"
        count = index.get_descendant_count(node.id)
        if count:
            line += f" ({count})"
        click.echo(line)


@main.command()
@click.argument('file', type=click.Path(dir_okay=False))
@click.argument('task_id')
def info(file, task_id):
    """Show the relationships of one task."""
    index = HierarchyIndex(_load(file))
    if task_id not in index:
        raise click.ClickException(f"Unknown task: {task_id}")

    click.echo(f"📋 {_label(index.get_task(task_id))}")
    click.echo(f"   ⬆️  Parent: {index.get_parent(task_id) or '-'}")
    click.echo(f"   ⬇️  Children: {', '.join(index.get_children(task_id)) or '-'}")
    click.echo(f"   🧭 Ancestors: {' > '.join(index.get_ancestors(task_id)) or '-'}")
    click.echo(f"   🌳 Root: {index.get_root_parent(task_id)}")
    click.echo(f"   📏 Depth: {index.get_depth(task_id)}")
    click.echo(f"   🔢 Descendants: {index.get_descendant_count(task_id)}")
    kind = []
    if index.is_root(task_id):
        kind.append("root")
    if index.is_leaf(task_id):
        kind.append("leaf")
    click.echo(f"   🏷️  Kind: {', '.join(kind) or 'inner'}")


@main.command()
@click.argument('file', type=click.Path(dir_okay=False))
@click.argument('task_id', required=False)
def parents(file, task_id):
    """List the tasks that may become TASK_ID's parent (any task for a new one)."""
    validator = RelationshipValidator(_load(file))
    if task_id is not None and task_id not in validator.index:
        raise click.ClickException(f"Unknown task: {task_id}")

    available = validator.get_available_parents(task_id)
    if not available:
        click.echo("📭 No legal parents")
        return
    for task in available:
        click.echo(_label(task))


@main.command()
@click.argument('file', type=click.Path(dir_okay=False))
@click.argument('task_id')
@click.argument('parent_id')
@click.option('--max-depth', type=int, default=None, help='Depth limit (defaults to TASKFOREST_MAX_DEPTH or 3)')
def check(file, task_id, parent_id, max_depth):
    """Check whether PARENT_ID may become TASK_ID's parent."""
    validator = RelationshipValidator(_load(file))
    if task_id not in validator.index:
        raise click.ClickException(f"Unknown task: {task_id}")

    if max_depth is None:
        max_depth = _settings().max_depth

    try:
        validator.check_reparent(task_id, parent_id, max_depth)
    except RecoverableError as e:
        click.echo(f"❌ {e}")
        sys.exit(1)

    click.echo(f"✅ '{parent_id}' can be the parent of '{task_id}'")


if __name__ == "__main__":
    main()
