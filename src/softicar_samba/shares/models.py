import os
from typing import List, Optional

from pydantic import BaseModel, Field


class SMBShare(BaseModel):
    name: str
    path: str
    read_only: bool = False
    valid_users: List[str] = Field(default_factory=list)

    def render(self) -> str:
        """Render the share as an smb.conf stanza."""
        lines = [
            f"[{self.name}]",
            f"path = {self.path}",
            f"read only = {'yes' if self.read_only else 'no'}",
        ]
        if self.valid_users:
            lines.append(f"valid users = {' '.join(self.valid_users)}")
        return "\n".join(lines) + "\n"


class Instance(BaseModel):
    """A tenant's user, share directory and share definition.

    The system user, the SMB user, the share name and the basenames of the
    share directory, fragment file and password file are all the identifier.
    """
    name: str
    identifier: str
    share_dir: str
    fragment_file: str
    password_file: str

    @classmethod
    def from_name(cls, name: str, prefix: str, shares_dir: str, conf_dir: str, passwords_dir: str) -> "Instance":
        identifier = f"{prefix}-{name}"
        return cls(
            name=name,
            identifier=identifier,
            share_dir=os.path.join(shares_dir, identifier),
            fragment_file=os.path.join(conf_dir, f"{identifier}.conf"),
            password_file=os.path.join(passwords_dir, f"{identifier}.txt"),
        )

    def share(self) -> SMBShare:
        return SMBShare(name=self.identifier, path=self.share_dir, valid_users=[self.identifier])


class Credentials(BaseModel):
    user: str
    # None when the user was already registered and kept its password
    password: Optional[str] = None

    def display_password(self) -> str:
        return self.password if self.password is not None else "(unchanged)"
