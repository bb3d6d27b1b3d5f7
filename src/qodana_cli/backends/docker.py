"""Containerized backend running linters through the Docker daemon."""

from __future__ import annotations

from typing import Any

import docker
from docker.errors import APIError, DockerException, ImageNotFound, NotFound

from qodana_cli.backends.base import OutputSink, ReadyHandle
from qodana_cli.backends.stream import OutputPump
from qodana_cli.models.common import BackendKind
from qodana_cli.models.plan import ExecutionPlan, ExecutionResult
from qodana_cli.utils.errors import BackendError, NetworkError, ScanCancelled, retry
from qodana_cli.utils.logging import get_logger_with_context

STOP_TIMEOUT = 10


class DockerBackend:
    """Backend for Docker linter images.

    This backend uses the Docker SDK to pull the linter image, run it
    with the project, results and cache directories mounted, and
    stream its output while waiting for it to exit.

    Example:
        backend = DockerBackend()
        handle = backend.prepare(plan, on_output=print)
        try:
            result = backend.run(handle)
        finally:
            backend.teardown(handle)
    """

    def __init__(
        self,
        client: Any = None,
        pull_attempts: int = 3,
        pull_delay: float = 2.0,
    ) -> None:
        """Initialize the Docker backend.

        Args:
            client: Docker client to use instead of one built from the environment
            pull_attempts: Attempts for pulling an image on network errors
            pull_delay: Initial delay between pull attempts in seconds
        """
        self._client = client
        self._pull_attempts = pull_attempts
        self._pull_delay = pull_delay

    @property
    def client(self) -> Any:
        """Get the Docker client, creating it if necessary."""
        if self._client is None:
            try:
                self._client = docker.from_env()
                self._client.ping()
            except (DockerException, OSError) as e:
                self._client = None
                raise BackendError(
                    f"Failed to connect to Docker daemon, is Docker installed and running? ({e})",
                    backend=BackendKind.DOCKER.value,
                    cause=e,
                ) from e
        return self._client

    def image_exists(self, reference: str) -> bool:
        """Check if an image exists locally.

        Raises:
            BackendError: If the daemon cannot answer
        """
        try:
            self.client.images.get(reference)
            return True
        except ImageNotFound:
            return False
        except APIError as e:
            raise BackendError(f"Failed to inspect image {reference}: {e}", backend="docker", cause=e) from e

    def pull_image(self, reference: str) -> None:
        """Pull an image, retrying on network errors.

        Raises:
            BackendError: If the image does not exist, access is denied,
                or the registry stays unreachable after all attempts
        """
        logger = get_logger_with_context("backends.docker", image=reference)
        pull = retry(
            max_attempts=self._pull_attempts,
            delay=self._pull_delay,
            exceptions=(NetworkError,),
        )(self._pull_once)

        logger.info("Pulling linter image")
        try:
            pull(reference)
        except NetworkError as e:
            raise BackendError(
                f"Failed to pull {reference} after {self._pull_attempts} attempts: {e.message}",
                backend="docker",
                cause=e,
            ) from e

    def _pull_once(self, reference: str) -> None:
        try:
            self.client.images.pull(reference)
        except NotFound as e:
            raise BackendError(f"Image not found: {reference}", backend="docker", cause=e) from e
        except APIError as e:
            if e.is_server_error():
                raise NetworkError(f"Registry error while pulling {reference}: {e}", reference=reference) from e
            err_str = str(e).lower()
            if "unauthorized" in err_str or "authentication" in err_str or "denied" in err_str:
                raise BackendError(f"Authentication failed for {reference}", backend="docker", cause=e) from e
            raise BackendError(f"Failed to pull image {reference}: {e}", backend="docker", cause=e) from e
        except OSError as e:
            raise NetworkError(f"Connection error while pulling {reference}: {e}", reference=reference) from e

    def prepare(self, plan: ExecutionPlan, on_output: OutputSink | None = None) -> ReadyHandle:
        """Make sure the linter image is available locally.

        Raises:
            BackendError: If Docker is unreachable or the image cannot be obtained
        """
        if self.image_exists(plan.target):
            get_logger_with_context("backends.docker", image=plan.target).debug("Image present locally")
        elif plan.skip_pull:
            raise BackendError(
                f"Image {plan.target} is not available locally and pulling is disabled",
                backend="docker",
            )
        else:
            self.pull_image(plan.target)
        return ReadyHandle(plan, on_output)

    def run(self, handle: ReadyHandle) -> ExecutionResult:
        """Run the linter container and wait for it to exit.

        Raises:
            BackendError: If the container cannot be started
            ScanCancelled: If interrupted; the container is stopped first
        """
        plan = handle.plan
        logger = get_logger_with_context("backends.docker", image=plan.target)
        handle.start_clock()

        try:
            container = self.client.containers.run(
                plan.target,
                command=plan.args,
                volumes=[f"{m.source}:{m.target}:{m.mode}" for m in plan.mounts],
                environment=plan.environment,
                ports=plan.ports or None,
                user=plan.user or None,
                working_dir=plan.working_dir or None,
                detach=True,
                tty=False,
            )
        except DockerException as e:
            raise BackendError(f"Failed to start {plan.target}: {e}", backend="docker", cause=e) from e

        handle.resource = container
        logger.debug(f"Started container {container.id[:12]}")

        pump = OutputPump(container.logs(stream=True, follow=True), handle.on_output, name="docker").start()
        try:
            status = container.wait()
        except KeyboardInterrupt:
            logger.warning("Interrupted, stopping container")
            self._stop(container)
            pump.join(STOP_TIMEOUT)
            raise ScanCancelled(f"Scan with {plan.target} cancelled") from None
        except DockerException as e:
            self._stop(container)
            raise BackendError(f"Lost connection to container: {e}", backend="docker", cause=e) from e

        pump.join()
        exit_code = int(status.get("StatusCode", -1)) if isinstance(status, dict) else int(status)
        logger.info(f"Linter exited with code {exit_code}")

        return ExecutionResult(
            exit_code=exit_code,
            stdout=self._logs(container, stdout=True, stderr=False),
            stderr=self._logs(container, stdout=False, stderr=True),
            duration=handle.elapsed,
            backend=BackendKind.DOCKER,
        )

    def teardown(self, handle: ReadyHandle) -> None:
        """Remove the container, if one was started."""
        container = handle.resource
        if container is None:
            return
        try:
            container.remove(force=True)
        except NotFound:
            pass
        except DockerException as e:
            get_logger_with_context("backends.docker", image=handle.plan.target).warning(
                f"Failed to remove container {container.id[:12]}: {e}"
            )
        handle.resource = None

    @staticmethod
    def _stop(container: Any) -> None:
        try:
            container.stop(timeout=STOP_TIMEOUT)
        except NotFound:
            pass

    @staticmethod
    def _logs(container: Any, stdout: bool, stderr: bool) -> str:
        data = container.logs(stdout=stdout, stderr=stderr)
        if isinstance(data, bytes):
            return data.decode("utf-8", errors="replace")
        return str(data)
