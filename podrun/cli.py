import typer
from typing import Optional

from podrun import __version__
from podrun.core.config import get_settings
from podrun.core.errors import PodRunError
from podrun.core.logger import setup_logger
from podrun.core.status import TaskStatus
from podrun.pod.executor import run_script_pod

logger = setup_logger(__name__, include_location=True)

OUTPUT_LABEL = "Pod logs:\n"

cli_app = typer.Typer(help="Run a local script in an ephemeral Kubernetes pod and print its output.")


@cli_app.callback()
def main():
    """podrun command line interface."""


@cli_app.command("run")
def run_command(
    script: str = typer.Argument("script.py", help="Script to run; relative paths resolve against the current directory"),
    kubeconfig: Optional[str] = typer.Option(None, "--kubeconfig", "-k", help="Path to kubeconfig (default: $KUBECONFIG or ~/.kube/config)"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace to create the pod in (default: default)"),
    image: Optional[str] = typer.Option(None, "--image", "-i", help="Container image (default: python:3.8)"),
    poll_interval: Optional[float] = typer.Option(None, "--poll-interval", help="Seconds between status checks (default: 5)"),
    in_cluster: Optional[bool] = typer.Option(None, "--in-cluster/--no-in-cluster", help="Use the in-cluster service account config"),
    cleanup: Optional[bool] = typer.Option(None, "--cleanup/--no-cleanup", help="Delete the pod after its logs are retrieved"),
    fail_on_task_error: bool = typer.Option(False, "--fail-on-task-error", help="Exit with code 2 when the pod ends in Failed"),
):
    """Run SCRIPT in a pod, wait for it to finish and print its logs."""
    try:
        settings = get_settings(
            kubeconfig=kubeconfig,
            namespace=namespace,
            image=image,
            poll_interval=poll_interval,
            in_cluster=in_cluster,
            cleanup=cleanup,
        )
        result = run_script_pod(script, settings)
    except PodRunError as e:
        logger.error(f"Run failed: {e.info.to_dict()}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(OUTPUT_LABEL + result.output, nl=False)

    if result.status != TaskStatus.SUCCEEDED:
        logger.warning(f"Pod {result.handle} ended with status {result.status.value} (exit code: {result.exit_code})")
        if fail_on_task_error:
            raise typer.Exit(code=2)


@cli_app.command("version")
def version_command():
    """Print the podrun version."""
    typer.echo(__version__)


if __name__ == "__main__":
    cli_app()
