# This file is part of PPA Builder, a tool for publishing Debian source packages to Launchpad PPAs.
#
# Copyright 2025 Canonical Ltd.
#
# SPDX-License-Identifier: GPL-3.0-only
#
# PPA Builder is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License version 3, as published by the
# Free Software Foundation.
#
# PPA Builder is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranties of MERCHANTABILITY,
# SATISFACTORY QUALITY, or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with
# PPA Builder. If not, see <http://www.gnu.org/licenses/>.

"""GPG signing key selection and generation.

Launchpad only accepts uploads signed by a key registered with the
account, so the run either reuses the configured key, lets the user pick
one from the keyring, or walks them through generating a new one.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ppabuilder.exceptions import SigningKeyError
from ppabuilder.models import MaintainerProfile
from ppabuilder.prompts import InputProvider
from ppabuilder.run import activity, detail, failure, success, warning
from ppabuilder.tools import run_command

logger = logging.getLogger(__name__)

DEFAULT_KEYSERVER = "keyserver.ubuntu.com"


def key_exists(key_id: str) -> bool:
    """Return True if ``key_id`` names a secret key in the keyring."""
    return run_command(["gpg", "--list-secret-keys", key_id], capture=True).returncode == 0


def list_secret_keys() -> str:
    result = run_command(["gpg", "--list-secret-keys"], capture=True)
    if result.returncode != 0:
        return ""
    return result.stdout


def has_secret_keys() -> bool:
    return any(line.startswith("sec") for line in list_secret_keys().splitlines())


def find_key_id(email: str) -> str | None:
    """Return the long ID of the newest secret key for ``email``.

    Parses ``--with-colons`` output, where field 5 of a ``sec`` record is
    the key ID.
    """
    result = run_command(
        ["gpg", "--list-secret-keys", "--with-colons", "--keyid-format", "LONG", email],
        capture=True,
    )
    if result.returncode != 0:
        return None
    key_id = None
    for line in result.stdout.splitlines():
        fields = line.split(":")
        if fields[0] == "sec" and len(fields) > 4 and fields[4]:
            key_id = fields[4]
    return key_id


def generate_key(profile: MaintainerProfile) -> str:
    """Run gpg's interactive key generation and return the new key ID.

    Raises:
        SigningKeyError: If generation fails or the key cannot be found.
    """
    activity("gpg", "Generating new GPG key...")
    activity("gpg", "Please follow the prompts to create your key:")
    activity("gpg", "Recommended settings:")
    detail("  - Key type: RSA and RSA")
    detail("  - Key size: 4096 bits")
    detail("  - Key validity: 0 (never expires)")
    detail(f"  - Real name: {profile.name}")
    detail(f"  - Email: {profile.email}")

    if run_command(["gpg", "--full-generate-key"]).returncode != 0:
        raise SigningKeyError(message="Failed to generate GPG key")

    key_id = find_key_id(profile.email)
    if not key_id:
        raise SigningKeyError(message="Failed to get GPG key ID")
    success("gpg", "GPG key generated successfully")
    activity("gpg", f"Your GPG key ID is: {key_id}")
    return key_id


def export_public_key(key_id: str, dest_dir: Path) -> Path:
    """Write the ASCII-armored public key to ``<dest_dir>/<key_id>.asc``."""
    dest = dest_dir / f"{key_id}.asc"
    result = run_command(["gpg", "--armor", "--export", key_id], capture=True)
    if result.returncode != 0:
        raise SigningKeyError(message=f"Failed to export public key {key_id}")
    dest.write_text(result.stdout, encoding="utf-8")
    success("gpg", f"Public key exported to {dest}")
    return dest


def send_key(key_id: str, keyserver: str = DEFAULT_KEYSERVER) -> bool:
    """Publish the key; returns False instead of raising on failure."""
    activity("gpg", f"Uploading key to {keyserver}...")
    if run_command(["gpg", "--keyserver", keyserver, "--send-keys", key_id]).returncode != 0:
        failure("gpg", "Failed to upload key to keyserver")
        activity("gpg", "You may need to upload it manually at:")
        detail(f"https://{keyserver}/")
        return False
    success("gpg", "Key uploaded to keyserver")
    return True


def choose_existing_key(provider: InputProvider) -> str | None:
    """Offer keys already in the keyring; returns None to generate instead."""
    if not has_secret_keys():
        return None
    activity("gpg", "Existing GPG keys found:")
    detail(list_secret_keys().rstrip())
    if not provider.confirm("Would you like to use an existing key?", default=False):
        return None
    while True:
        key_id = provider.prompt("Enter the GPG key ID to use")
        if key_id and key_exists(key_id):
            return key_id
        failure("gpg", "Key not found. Please enter a valid key ID")


def setup_gpg(
    provider: InputProvider,
    profile: MaintainerProfile,
    export_dir: Path,
    keyserver: str = DEFAULT_KEYSERVER,
) -> tuple[str, bool]:
    """Select or create the signing key for ``profile``.

    Returns:
        Tuple of (key_id, changed). ``changed`` is True when the profile's
        key differs from before and should be saved.
    """
    activity("gpg", "GPG Key Setup")

    if profile.gpg_key:
        detail(f"Current GPG key: {profile.gpg_key}")
        if provider.confirm("Would you like to use this GPG key?", default=True):
            if key_exists(profile.gpg_key):
                success("gpg", "Using existing GPG key")
                return profile.gpg_key, False
            failure("gpg", "Configured GPG key not found in keyring")

    key_id = choose_existing_key(provider)
    if key_id:
        return key_id, key_id != profile.gpg_key

    key_id = generate_key(profile)
    export_path = export_public_key(key_id, export_dir)
    if not send_key(key_id, keyserver):
        warning("gpg", "Key was not published; Launchpad may reject the upload until it is")

    activity("gpg", "Important:")
    detail(f"1. Save your key ID: {key_id}")
    detail(f"2. Import your public key to Launchpad: {export_path}")
    detail("3. Wait a few minutes for the key to propagate to the keyserver")
    return key_id, True
