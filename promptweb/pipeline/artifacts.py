"""
Local artifact mirroring.
=========================
Writes the analysis and the generated files to a local directory so a
run can be inspected without cloning the repository.
"""
import json
import os
from typing import List

from ..domain import GeneratedFile, ProjectAnalysis
from .config import FileNames


class ArtifactManager:
    """Mirrors generated output under output_dir."""

    def __init__(self, output_dir: str):
        self.output_dir = os.path.abspath(output_dir)
        self.files_dir = os.path.join(self.output_dir, FileNames.FILES_DIR)
        os.makedirs(self.files_dir, exist_ok=True)

    def save_analysis(self, analysis: ProjectAnalysis) -> str:
        path = os.path.join(self.output_dir, FileNames.ANALYSIS)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(analysis.to_dict(), f, indent=2, ensure_ascii=False)
        return path

    def save_files(self, files: List[GeneratedFile]) -> List[str]:
        """Writes every file; later files with the same path overwrite earlier ones."""
        root = os.path.realpath(self.files_dir)
        written = []
        for generated in files:
            path = os.path.realpath(os.path.join(root, generated.file_path))
            if not path.startswith(root + os.sep):
                raise ValueError(f"Path escapes output directory: {generated.file_path}")
            os.makedirs(os.path.dirname(path), exist_ok=True)
            if isinstance(generated.content, bytes):
                with open(path, "wb") as f:
                    f.write(generated.content)
            else:
                with open(path, "w", encoding="utf-8") as f:
                    f.write(generated.content)
            written.append(generated.file_path)
        return written

    def list_saved(self) -> List[str]:
        """Lists saved files relative to files_dir."""
        saved = []
        for dirpath, _, filenames in os.walk(self.files_dir):
            for filename in filenames:
                saved.append(os.path.relpath(os.path.join(dirpath, filename), self.files_dir))
        return sorted(saved)
