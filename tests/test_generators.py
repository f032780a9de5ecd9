import unittest
from unittest.mock import AsyncMock, MagicMock

from promptweb.domain import DatabaseProject, PageStructure, ProjectAnalysis
from promptweb.exceptions import ServiceError
from promptweb.generators import LLMCodeGenerator, LLMProjectAnalyzer
from promptweb.generators.code_generator import parse_files

ANALYSIS_JSON = {
    "projectName": "Cozy Cafe",
    "description": "Landing site for a neighborhood cafe",
    "pages": [
        {
            "name": "Home",
            "path": "/",
            "description": "Hero and opening hours",
            "components": [{"name": "Hero", "type": "component", "description": "Big banner"}],
            "features": ["Opening hours"],
        },
        {
            "name": "Menu",
            "path": "menu",
            "description": "Drinks and pastries",
            "components": [],
            "features": ["Menu list"],
        },
    ],
    "features": ["Responsive design"],
    "techStack": ["Next.js", "Shadcn UI", "TailwindCSS"],
}

DATABASE = DatabaseProject(
    id="abcd1234",
    name="cozy-cafe",
    connection_url="https://abcd1234.supabase.co",
    public_key="anon-key",
    private_key="service-key",
)


def make_llm(**kwargs):
    llm = MagicMock()
    llm.prompt_json = AsyncMock(**kwargs)
    return llm


class TestProjectAnalyzer(unittest.IsolatedAsyncioTestCase):
    async def test_parses_analysis(self):
        llm = make_llm(return_value=ANALYSIS_JSON)
        analysis = await LLMProjectAnalyzer(llm).analyze('A cafe site called "Cozy Cafe"')

        self.assertEqual(analysis.project_name, "cozy-cafe")
        self.assertEqual([p.path for p in analysis.pages], ["/", "/menu"])
        self.assertEqual(analysis.pages[0].components[0].name, "Hero")
        self.assertEqual(llm.prompt_json.await_args.kwargs["temperature"], 0.3)
        self.assertIn("A cafe site called 'Cozy Cafe'", llm.prompt_json.await_args.args[0])

    async def test_errors_propagate_by_default(self):
        llm = make_llm(side_effect=ServiceError("gemini", "quota exceeded", status_code=429))
        with self.assertRaises(ServiceError):
            await LLMProjectAnalyzer(llm).analyze("a cafe site")

    async def test_analysis_without_pages_is_an_error(self):
        llm = make_llm(return_value={"projectName": "x", "description": "y", "pages": []})
        with self.assertRaises(ServiceError):
            await LLMProjectAnalyzer(llm).analyze("a cafe site")

    async def test_fallback_returns_default_analysis(self):
        llm = make_llm(side_effect=ServiceError("gemini", "quota exceeded"))
        analysis = await LLMProjectAnalyzer(llm, fallback_on_error=True).analyze("a cafe site")

        self.assertTrue(analysis.project_name.startswith("generated-website-"))
        self.assertEqual(analysis.pages[0].path, "/")
        self.assertIn("Next.js", analysis.tech_stack)

    async def test_fallback_does_not_hide_programming_errors(self):
        llm = make_llm(side_effect=TypeError("bad call"))
        with self.assertRaises(TypeError):
            await LLMProjectAnalyzer(llm, fallback_on_error=True).analyze("a cafe site")


class TestCodeGenerator(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.analysis = ProjectAnalysis.from_dict(ANALYSIS_JSON)
        self.menu = self.analysis.pages[1]

    async def test_generate_page(self):
        llm = make_llm(return_value={"files": [
            {"filePath": "src/app/menu/page.tsx", "content": "export default function MenuPage() {}",
             "description": "Menu page"},
            {"filePath": "/src/components/MenuList.tsx", "content": "export function MenuList() {}"},
        ]})
        files = await LLMCodeGenerator(llm).generate_page(self.menu, self.analysis)

        self.assertEqual([f.file_path for f in files], ["src/app/menu/page.tsx", "src/components/MenuList.tsx"])
        prompt = llm.prompt_json.await_args.args[0]
        self.assertIn("src/app/menu/page.tsx", prompt)
        self.assertNotIn("Supabase", prompt)
        self.assertEqual(llm.prompt_json.await_args.kwargs["temperature"], 0.4)

    async def test_database_details_reach_the_prompt(self):
        llm = make_llm(return_value={"files": [{"filePath": "src/app/page.tsx", "content": "x"}]})
        await LLMCodeGenerator(llm).generate_page(self.analysis.pages[0], self.analysis, DATABASE)

        prompt = llm.prompt_json.await_args.args[0]
        self.assertIn("https://abcd1234.supabase.co", prompt)
        self.assertIn("@/lib/supabase", prompt)
        self.assertNotIn("service-key", prompt)

    async def test_missing_file_list_is_an_error(self):
        llm = make_llm(return_value={"answer": "sorry"})
        with self.assertRaises(ServiceError):
            await LLMCodeGenerator(llm).generate_structure(self.analysis)

    async def test_structure_fallback_uses_templates(self):
        llm = make_llm(side_effect=ServiceError("gemini", "timeout"))
        files = await LLMCodeGenerator(llm, fallback_on_error=True).generate_structure(self.analysis, DATABASE)

        paths = [f.file_path for f in files]
        self.assertIn("package.json", paths)
        self.assertIn("src/app/layout.tsx", paths)
        self.assertIn("src/lib/supabase.ts", paths)
        self.assertIn("@supabase/supabase-js", files[0].content)
        self.assertEqual(llm.prompt_json.await_args.kwargs["temperature"], 0.2)

    async def test_page_fallback_uses_default_page(self):
        llm = make_llm(return_value={"files": []})
        files = await LLMCodeGenerator(llm, fallback_on_error=True).generate_page(self.menu, self.analysis)

        self.assertEqual(len(files), 1)
        self.assertEqual(files[0].file_path, "src/app/menu/page.tsx")
        self.assertIn("export default function MenuPage()", files[0].content)


class TestParseFiles(unittest.TestCase):
    def test_accepts_bare_list(self):
        files = parse_files([{"filePath": "a.ts", "content": "x"}])
        self.assertEqual(files[0].file_path, "a.ts")

    def test_rejects_parent_directory_paths(self):
        with self.assertRaises(ServiceError):
            parse_files({"files": [{"filePath": "../etc/passwd", "content": "x"}]})

    def test_rejects_entries_without_content(self):
        with self.assertRaises(ServiceError):
            parse_files({"files": [{"filePath": "a.ts"}]})


if __name__ == '__main__':
    unittest.main()
