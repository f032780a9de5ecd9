import json
import os
import shutil
import tempfile
import unittest

from promptweb.domain import DatabaseProject, GeneratedFile, PageStructure, ProjectAnalysis
from promptweb.pipeline.artifacts import ArtifactManager
from promptweb.templates import (
    default_analysis,
    default_page_code,
    default_page_path,
    default_project_structure,
    scaffold_files,
)

DATABASE = DatabaseProject(
    id="abcd1234",
    name="demo",
    connection_url="https://abcd1234.supabase.co",
    public_key="anon-key",
    private_key="service-key",
)


class TestTemplates(unittest.TestCase):
    def test_default_page_path(self):
        self.assertEqual(default_page_path(PageStructure("Home", "/", "")), "src/app/page.tsx")
        self.assertEqual(default_page_path(PageStructure("Blog", "/blog/", "")), "src/app/blog/page.tsx")

    def test_default_page_code_lists_features(self):
        page = PageStructure("Contact us", "/contact", "Reach the team", features=("Form", "Map"))
        code = default_page_code(page)
        self.assertIn("export default function ContactUsPage()", code)
        self.assertIn("Map", code)
        self.assertNotIn("supabase", code)

    def test_structure_without_database(self):
        analysis = default_analysis("A bakery")
        files = default_project_structure(analysis)
        paths = [f.file_path for f in files]
        self.assertEqual(len(paths), len(set(paths)))
        self.assertNotIn("src/lib/supabase.ts", paths)
        package = json.loads(files[0].content)
        self.assertEqual(package["name"], analysis.project_name)
        self.assertNotIn("@supabase/supabase-js", package["dependencies"])

    def test_structure_with_database_never_writes_service_key(self):
        files = default_project_structure(default_analysis("A bakery"), DATABASE)
        by_path = {f.file_path: f.content for f in files}
        self.assertIn("https://abcd1234.supabase.co", by_path["src/lib/supabase.ts"])
        self.assertTrue(all("service-key" not in content for content in by_path.values()))

    def test_scaffold_files_are_ui_components(self):
        files = scaffold_files()
        self.assertTrue(all(f.file_path.startswith("src/components/ui/") for f in files))
        self.assertIn("src/components/ui/button.tsx", [f.file_path for f in files])


class TestArtifactManager(unittest.TestCase):
    def setUp(self):
        self.output_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.output_dir)

    def test_saves_analysis_and_files(self):
        manager = ArtifactManager(self.output_dir)
        analysis = ProjectAnalysis.from_dict({"projectName": "Demo", "description": "d", "pages": []})
        path = manager.save_analysis(analysis)
        manager.save_files([GeneratedFile("src/app/page.tsx", "a"), GeneratedFile("src/app/page.tsx", "b")])

        with open(path, encoding="utf-8") as f:
            self.assertEqual(json.load(f)["projectName"], "demo")
        self.assertEqual(manager.list_saved(), [os.path.join("src", "app", "page.tsx")])
        with open(os.path.join(manager.files_dir, "src", "app", "page.tsx"), encoding="utf-8") as f:
            self.assertEqual(f.read(), "b")

    def test_rejects_paths_outside_output(self):
        manager = ArtifactManager(self.output_dir)
        with self.assertRaises(ValueError):
            manager.save_files([GeneratedFile("../escape.txt", "x")])


if __name__ == '__main__':
    unittest.main()
