"""
Git client infrastructure for satisfy.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from typing import Optional, List, Tuple
import logging

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        for line in client.ls_remote("https://github.com/acme/widget.git"):
            print(line)
    """

    def __init__(self, binary: str = "git", timeout: int = 60):
        """
        Initialize GitClient.

        Args:
            binary: Git executable to run (default: "git")
            timeout: Command timeout in seconds (default: 60)
        """
        self.binary = binary
        self.timeout = timeout

    def _run(self, args: List[str]) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            args: Arguments passed to git

        Returns:
            Tuple of (stdout, returncode)
        """
        cmd = [self.binary] + args
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )

            if result.returncode != 0 and result.stderr:
                logger.debug(f"git stderr: {result.stderr.strip()}")

            return result.stdout, result.returncode

        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            return None, -1
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            return None, -1

    def ls_remote(self, url: str) -> List[str]:
        """
        List the tags and branches of a remote repository.

        Args:
            url: Remote URL

        Returns:
            Raw output lines ("<sha>\\t<ref>"), or an empty list if the
            remote could not be listed
        """
        output, code = self._run(["ls-remote", "--tags", "--heads", url])
        if code != 0:
            logger.warning(f"Could not list references for {url} (exit {code})")
            return []
        if not output:
            return []
        return output.splitlines()
