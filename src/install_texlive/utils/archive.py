"""Archive extraction with leading path components stripped."""

import io
import shutil
import tarfile
import zipfile
from pathlib import Path, PurePosixPath


class UnsupportedArchiveError(ValueError):
    """Raised for archive formats other than zip and gzip/bzip2/xz tarballs."""


def _strip(name: str, strip_components: int) -> PurePosixPath | None:
    """Drop the leading components of an archive member name.

    Returns None for members that vanish after stripping or would escape the
    target directory.
    """
    parts = PurePosixPath(name.replace("\\", "/")).parts
    parts = tuple(p for p in parts if p not in ("", "."))
    if len(parts) <= strip_components:
        return None
    stripped = parts[strip_components:]
    if ".." in stripped or stripped[0].startswith("/"):
        return None
    return PurePosixPath(*stripped)


def extract_archive(data: bytes, filename: str, target_dir: Path, strip_components: int = 1) -> None:
    """
    Extract an in-memory archive into target_dir.

    Args:
        data: Archive content
        filename: Archive file name, used to pick the format
        target_dir: Destination directory, created if missing
        strip_components: Number of leading path components to remove from member names

    Raises:
        UnsupportedArchiveError: If the file name has an unknown extension
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    if filename.endswith(".zip"):
        _extract_zip(data, target_dir, strip_components)
    elif filename.endswith((".tar.gz", ".tgz", ".tar.bz2", ".tar.xz", ".tar")):
        _extract_tar(data, target_dir, strip_components)
    else:
        raise UnsupportedArchiveError(f"Unsupported archive format: {filename}")


def _extract_tar(data: bytes, target_dir: Path, strip_components: int) -> None:
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as tar_ref:
        members = []
        for member in tar_ref.getmembers():
            stripped = _strip(member.name, strip_components)
            if stripped is None:
                continue
            if member.islnk():
                link = _strip(member.linkname, strip_components)
                if link is None:
                    continue
                member.linkname = str(link)
            member.name = str(stripped)
            members.append(member)
        tar_ref.extractall(target_dir, members=members)


def _extract_zip(data: bytes, target_dir: Path, strip_components: int) -> None:
    with zipfile.ZipFile(io.BytesIO(data), "r") as zip_ref:
        for info in zip_ref.infolist():
            stripped = _strip(info.filename, strip_components)
            if stripped is None:
                continue
            dest = target_dir / stripped
            if info.is_dir():
                dest.mkdir(parents=True, exist_ok=True)
                continue
            dest.parent.mkdir(parents=True, exist_ok=True)
            with zip_ref.open(info) as src, open(dest, "wb") as out_file:
                shutil.copyfileobj(src, out_file)
