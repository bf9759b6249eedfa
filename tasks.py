""" Invoke tasks. """
import os
import sys
import io
from invoke.tasks import task

if isinstance(sys.stdout, io.TextIOWrapper):
    sys.stdout.reconfigure(encoding='utf-8')


@task
def install(c):
    c.run("pip install -e .[test]")


@task
def api(c):
    c.run("uvicorn main:app --reload --host 127.0.0.1 --port 8001", env={"PYTHONUTF8": "1"})


@task
def test(c):
    c.run("pytest -q", env={"PYTHONUTF8": "1"})


@task
def template(c, path="staff_template.xlsx"):
    """Write an empty staff import template."""
    from utils.exporter import write_staff_template

    write_staff_template(path)
    print(f"Template written to {path}")


@task
def clean(c):
    """
    Cross-platform clean task to remove all __pycache__ folders and .pyc files.
    """
    if os.name == 'nt':  # Windows
        # Remove all .pyc files
        c.run("for /R %f in (*.pyc) do del /F /Q \"%f\"", warn=True)
        # Remove all __pycache__ directories recursively
        c.run('for /d /r %d in (__pycache__) do @if exist "%d" rmdir /s /q "%d"', warn=True)
    else:  # Unix/Linux/macOS
        c.run("find . -type f -name '*.pyc' -delete", warn=True)
        c.run("find . -type d -name '__pycache__' -exec rm -r {} +", warn=True)


@task
def import_staff(c, path="data/staff.xlsx"):
    """Load a staff spreadsheet into the stored workspace, replacing its staff list."""
    from utils.loader import load_staff_profiles
    from utils.storage import load_workspace, save_workspace

    workspace = load_workspace()
    workspace.staff = load_staff_profiles(path, tier_defaults=workspace.tier_defaults())
    save_workspace(workspace)
    print(f"Imported {len(workspace.staff)} staff from {path}")
