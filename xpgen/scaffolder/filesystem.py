"""Project filesystem: reads existing files and writes rendered products.

All paths are relative to the project root.  Writing honours the product's
existence policy: ``error`` refuses to touch a file that is already there,
``overwrite`` always replaces it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .errors import ExistingFileConflict, ReadFailure, WriteFailure
from .models import ExistsPolicy
from .products import TemplateProduct


class ProjectFilesystem:
    """Relative-path file access rooted at a project directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, relative_path: str | Path) -> Path:
        return self.root / relative_path

    def exists(self, relative_path: str | Path) -> bool:
        return self.resolve(relative_path).exists()

    def read(self, relative_path: str | Path) -> Optional[str]:
        """Return the file's text, or ``None`` if it does not exist.

        Raises:
            ReadFailure: For any error other than the file being absent.
        """
        path = self.resolve(relative_path)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise ReadFailure(f"Cannot read existing file: {exc}", path=str(relative_path)) from exc

    def write_text(
        self,
        relative_path: str | Path,
        content: str,
        policy: ExistsPolicy = ExistsPolicy.ERROR,
        template_type: str = "",
    ) -> Path:
        """Write *content* under the given existence *policy*."""
        path = self.resolve(relative_path)
        if policy is ExistsPolicy.ERROR and path.exists():
            raise ExistingFileConflict(str(relative_path), template_type=template_type)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise WriteFailure(
                f"Cannot write file: {exc}",
                template_type=template_type,
                path=str(relative_path),
            ) from exc
        return path

    def write(self, product: TemplateProduct) -> Path:
        """Render *product* and write it to its resolved path."""
        if not product.path:
            product.set_template_defaults()
        return self.write_text(
            product.path,
            product.render(),
            policy=product.exists_policy,
            template_type=product.template_type,
        )
