"""
Prompt library
==============
Organized by pipeline step.

1. Analysis - Turn the user's description into a project plan
2. Structure - Configuration, layout and shared files
3. Page Generation - The files of a single page
"""

SYSTEM_PROMPT_ENGINEER = (
    "You are a senior Next.js engineer. You answer with a single JSON object "
    "and nothing else."
)

# =============================================================================
# 1. ANALYSIS
# =============================================================================

PROMPT_PROJECT_ANALYSIS = """
Analyze the website the user asked for and extract the project plan.

User request: "{user_prompt}"

Respond with a JSON object of exactly this shape:
{{
  "projectName": "kebab-case project name",
  "description": "one or two sentence project description",
  "pages": [
    {{
      "name": "page name",
      "path": "route path, starting with /",
      "description": "what the page is for",
      "components": [
        {{
          "name": "PascalCase component name",
          "type": "component | layout | page",
          "description": "what the component renders",
          "props": ["optional", "prop", "names"]
        }}
      ],
      "features": ["page-level features"]
    }}
  ],
  "features": ["project-wide features"],
  "techStack": ["Next.js", "Shadcn UI", "TailwindCSS"]
}}

Rules:
- The first page must be the home page with path "/".
- Keep page paths unique.
- Only list features the user asked for or that a site of this kind clearly needs.
"""

# =============================================================================
# 2. STRUCTURE
# =============================================================================

PROMPT_PROJECT_STRUCTURE = """
Generate the complete structure files of a Next.js 14 + Shadcn UI project.

Project:
- Name: {project_name}
- Description: {description}
- Tech stack: {tech_stack}
{database_info}
Generate these files in full:
1. package.json - Next.js 14, Shadcn UI dependencies{database_dependency}
2. next.config.js - Next.js configuration
3. tailwind.config.ts - TailwindCSS + Shadcn configuration
4. components.json - Shadcn UI configuration (src folder layout)
5. tsconfig.json - TypeScript configuration with the @/* alias pointing to ./src/*
6. src/app/layout.tsx - root layout
7. src/app/globals.css - global styles including Shadcn CSS variables
8. src/lib/utils.ts - the cn() helper
9. .gitignore - Next.js gitignore
{database_files}
Every file lives under the src/ layout and the @ alias must resolve.
Do NOT generate src/components/ui/*; those components are provided separately.

Respond with a JSON object:
{{"files": [{{"filePath": "relative/path", "content": "full file content", "description": "short description"}}]}}
"""

# =============================================================================
# 3. PAGE GENERATION
# =============================================================================

PROMPT_PAGE_GENERATION = """
Generate the code of the following page using Next.js 14, Shadcn UI and TailwindCSS.

Project:
- Name: {project_name}
- Description: {description}
- Features: {project_features}
{database_info}
Page:
- Name: {page_name}
- Path: {page_path}
- Description: {page_description}
- Features: {page_features}
- Components: {page_components}

Rules:
1. Use the App Router layout (src/app); this page lives at {page_file}
2. Use Shadcn UI components from @/components/ui/*
3. Style with TailwindCSS for a modern look
4. TypeScript only
5. Responsive and accessible
6. Import through the @ alias (@/components, @/lib)
{database_rule}
Put page-specific components under src/components/.

Respond with a JSON object:
{{"files": [{{"filePath": "relative/path", "content": "full file content", "description": "short description"}}]}}
"""

DATABASE_INFO = """
Supabase project connected:
- Project URL: {connection_url}
- Anon key: {public_key}
- Authentication is enabled
"""

DATABASE_RULE_PAGE = (
    "7. Use the Supabase client exported from @/lib/supabase (@supabase/supabase-js) "
    "for data and authentication"
)

DATABASE_FILES_STRUCTURE = """10. src/lib/supabase.ts - Supabase client reading NEXT_PUBLIC_SUPABASE_URL and NEXT_PUBLIC_SUPABASE_ANON_KEY
11. .env.local.example - environment variable example (leave SUPABASE_SERVICE_ROLE_KEY empty)
"""
