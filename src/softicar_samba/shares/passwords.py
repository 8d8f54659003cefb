import os
import secrets
import string

PASSWORD_ALPHABET = string.ascii_letters + string.digits
PASSWORD_LENGTH = 24


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    """Generate a random alphanumeric password."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def ensure_password_directory(path: str) -> bool:
    """Create the private password directory. Returns True if it was created."""
    if os.path.isdir(path):
        return False
    os.makedirs(path, exist_ok=True)
    os.chmod(path, 0o700)
    return True


def write_password_file(path: str, password: str):
    """Write a password to a new file readable by the owner only.

    Refuses to overwrite an existing file.
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(password + "\n")
