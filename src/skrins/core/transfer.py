#!/usr/bin/env python3
"""
Remote Transfer Client

This module copies one local file to the remote target over SFTP, using
key-based SSH authentication through paramiko. Each upload opens its own
session and releases it before returning, also when the transfer fails
midway.

Host identity is NOT verified: unknown host keys are accepted and the user's
known_hosts file is not consulted. This keeps first-run setup free of
prompts but leaves uploads open to man-in-the-middle attacks; pin the host
key before using this on untrusted networks.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Links:
- Paramiko: https://docs.paramiko.org/en/stable/api/client.html

Sample input:
    client = SFTPTransferClient(config.require_remote())
    client.upload(Path("shot.png"), "3f2a....png")

Expected output:
    12345  # bytes written to <remote_dir>/3f2a....png
"""

import socket
from pathlib import Path

import paramiko
from paramiko.ssh_exception import NoValidConnectionsError
from loguru import logger

from skrins.core.config import RemoteTarget
from skrins.core.constants import TRANSFER_SETTINGS
from skrins.core.exceptions import TransferError


class SFTPTransferClient:
    """Uploads files to a RemoteTarget, one SSH session per file."""

    def __init__(self, remote: RemoteTarget, chunk_size: int = TRANSFER_SETTINGS["CHUNK_SIZE"]):
        self.remote = remote
        self.chunk_size = chunk_size

    def _check_key(self) -> None:
        key_path = self.remote.private_key_path
        try:
            with open(key_path, "rb") as f:
                f.read(1)
        except OSError as e:
            raise TransferError(f"Private key unreadable: {key_path} ({e.strerror or e})") from e

    def _connect(self) -> paramiko.SSHClient:
        """Open an authenticated SSH session or raise TransferError."""
        remote = self.remote
        client = paramiko.SSHClient()
        # Deliberately accept any host key, see module docstring.
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        where = f"{remote.user}@{remote.hostname}:{remote.port}"
        try:
            client.connect(
                hostname=remote.hostname,
                port=remote.port,
                username=remote.user,
                key_filename=str(remote.private_key_path),
                look_for_keys=False,
                allow_agent=False,
                timeout=remote.connect_timeout,
                banner_timeout=remote.connect_timeout,
                auth_timeout=remote.connect_timeout,
            )
        except paramiko.AuthenticationException as e:
            client.close()
            raise TransferError(f"Authentication rejected for {where}: {str(e)}") from e
        except NoValidConnectionsError as e:
            client.close()
            raise TransferError(f"Connection refused by {where}: {str(e)}") from e
        except socket.timeout as e:
            client.close()
            raise TransferError(f"Connection to {where} timed out after {remote.connect_timeout}s") from e
        except paramiko.SSHException as e:
            client.close()
            raise TransferError(f"SSH negotiation with {where} failed: {str(e)}") from e
        except OSError as e:
            client.close()
            raise TransferError(f"Cannot connect to {where}: {str(e)}") from e

        logger.debug(f"Connected to {where}")
        return client

    def _copy(self, sftp: paramiko.SFTPClient, local_path: Path, remote_path: str) -> int:
        total = 0
        with open(local_path, "rb") as src:
            dst = sftp.open(remote_path, "wb")
            with dst:
                dst.set_pipelined(True)
                while True:
                    chunk = src.read(self.chunk_size)
                    if not chunk:
                        break
                    dst.write(chunk)
                    total += len(chunk)
        return total

    def upload(self, local_path: Path, remote_name: str) -> int:
        """
        Copy a local file to <remote_dir>/<remote_name>.

        The destination is created or truncated.

        Args:
            local_path: File to upload
            remote_name: File name on the remote host

        Returns:
            int: Number of bytes transferred

        Raises:
            TransferError: On any failure; nothing about partial progress is reported
        """
        remote_path = self.remote.remote_path_for(remote_name)
        self._check_key()

        client = self._connect()
        with client:
            try:
                sftp = client.open_sftp()
            except (paramiko.SSHException, EOFError, OSError) as e:
                raise TransferError(f"Cannot open SFTP session: {str(e)}", remote_path) from e

            with sftp:
                try:
                    total = self._copy(sftp, Path(local_path), remote_path)
                except (paramiko.SSHException, EOFError, OSError) as e:
                    logger.error(f"Write failure for {remote_path}: {str(e)}")
                    raise TransferError(f"Write failure for {remote_path}: {str(e)}", remote_path) from e

        logger.info(f"Total of {total} bytes copied to {remote_path}")
        return total
