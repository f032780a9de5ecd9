"""
Built-in project templates.
===========================
Deterministic files used by the scaffold step and, when an adapter is
built with fallback_on_error=True, in place of model output.
"""
import json
import re
import time
from typing import List, Optional

from .domain import (
    ComponentKind,
    ComponentStructure,
    DatabaseProject,
    GeneratedFile,
    PageStructure,
    ProjectAnalysis,
)

DEFAULT_TECH_STACK = ("Next.js", "Shadcn UI", "TailwindCSS")


def default_analysis(prompt: str = "") -> ProjectAnalysis:
    """A one-page analysis used when the model cannot produce one."""
    return ProjectAnalysis(
        project_name=f"generated-website-{int(time.time() * 1000)}",
        description=(prompt or "").strip()[:200] or "Website generated from a user request",
        pages=(
            PageStructure(
                name="Home",
                path="/",
                description="Landing page",
                components=(
                    ComponentStructure(name="HomePage", kind=ComponentKind.PAGE, description="Main page component"),
                ),
                features=("Base layout", "Navigation"),
            ),
        ),
        features=("Responsive design", "Modern UI"),
        tech_stack=DEFAULT_TECH_STACK,
    )


def default_page_path(page: PageStructure) -> str:
    """App Router location of a page: src/app/page.tsx or src/app<path>/page.tsx."""
    path = page.path.rstrip("/")
    if not path:
        return "src/app/page.tsx"
    return f"src/app{path}/page.tsx"


def _component_name(page: PageStructure) -> str:
    name = re.sub(r"[^0-9A-Za-z]+", " ", page.name).title().replace(" ", "")
    if not name or name[0].isdigit():
        name = "Generated" + name
    return f"{name}Page"


def _jsx_text(text: str) -> str:
    return text.replace("{", "&#123;").replace("}", "&#125;").replace("<", "&lt;").replace(">", "&gt;")


def default_page_code(page: PageStructure, database: Optional[DatabaseProject] = None) -> str:
    """Static page listing the page's features as cards."""
    cards = "".join(
        f"""
          <div className="bg-white rounded-lg shadow-md p-6">
            <h3 className="text-xl font-semibold mb-2">{_jsx_text(feature)}</h3>
            <p className="text-gray-600">{_jsx_text(feature)}</p>
          </div>"""
        for feature in page.features
    )
    imports = "import { supabase } from '@/lib/supabase'\n\n" if database else ""
    return f"""{imports}export default function {_component_name(page)}() {{
  return (
    <div className="min-h-screen bg-gradient-to-br from-blue-50 to-indigo-100">
      <div className="container mx-auto px-4 py-8">
        <h1 className="text-4xl font-bold text-gray-900 mb-6">{_jsx_text(page.name)}</h1>
        <p className="text-lg text-gray-600">{_jsx_text(page.description)}</p>
        <div className="mt-8 grid gap-6 md:grid-cols-2 lg:grid-cols-3">{cards}
        </div>
      </div>
    </div>
  );
}}
"""


def default_page_files(page: PageStructure, database: Optional[DatabaseProject] = None) -> List[GeneratedFile]:
    return [
        GeneratedFile(
            file_path=default_page_path(page),
            content=default_page_code(page, database),
            description=f"{page.name} default code",
        )
    ]


# =============================================================================
# Project structure
# =============================================================================

def _package_json(analysis: ProjectAnalysis, database: Optional[DatabaseProject]) -> str:
    dependencies = {
        "next": "^14.0.0",
        "react": "^18.0.0",
        "react-dom": "^18.0.0",
        "@radix-ui/react-dialog": "^1.1.2",
        "@radix-ui/react-label": "^2.1.0",
        "@radix-ui/react-slot": "^1.1.0",
        "@radix-ui/react-toast": "^1.2.1",
        "class-variance-authority": "^0.7.0",
        "clsx": "^2.0.0",
        "lucide-react": "^0.400.0",
        "tailwind-merge": "^2.0.0",
        "tailwindcss-animate": "^1.0.7",
    }
    if database:
        dependencies["@supabase/supabase-js"] = "^2.39.0"
    package = {
        "name": analysis.project_name,
        "version": "0.1.0",
        "private": True,
        "scripts": {"dev": "next dev", "build": "next build", "start": "next start", "lint": "next lint"},
        "dependencies": dict(sorted(dependencies.items())),
        "devDependencies": {
            "typescript": "^5.0.0",
            "@types/node": "^20.0.0",
            "@types/react": "^18.0.0",
            "@types/react-dom": "^18.0.0",
            "autoprefixer": "^10.0.0",
            "postcss": "^8.0.0",
            "tailwindcss": "^3.0.0",
            "eslint": "^8.0.0",
            "eslint-config-next": "^14.0.0",
        },
    }
    return json.dumps(package, indent=2)


TSCONFIG = {
    "compilerOptions": {
        "lib": ["dom", "dom.iterable", "esnext"],
        "allowJs": True,
        "skipLibCheck": True,
        "strict": True,
        "noEmit": True,
        "esModuleInterop": True,
        "module": "esnext",
        "moduleResolution": "bundler",
        "resolveJsonModule": True,
        "isolatedModules": True,
        "jsx": "preserve",
        "incremental": True,
        "plugins": [{"name": "next"}],
        "baseUrl": ".",
        "paths": {"@/*": ["./src/*"]},
    },
    "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
    "exclude": ["node_modules"],
}

COMPONENTS_JSON = {
    "$schema": "https://ui.shadcn.com/schema.json",
    "style": "default",
    "rsc": True,
    "tsx": True,
    "tailwind": {
        "config": "tailwind.config.ts",
        "css": "src/app/globals.css",
        "baseColor": "slate",
        "cssVariables": True,
        "prefix": "",
    },
    "aliases": {
        "components": "@/components",
        "utils": "@/lib/utils",
        "ui": "@/components/ui",
        "lib": "@/lib",
        "hooks": "@/hooks",
    },
}

NEXT_CONFIG = """/** @type {import('next').NextConfig} */
const nextConfig = {
  images: {
    domains: ['localhost'],
  },
}

module.exports = nextConfig
"""

TAILWIND_CONFIG = """import type { Config } from "tailwindcss";

const colors = [
  "primary", "secondary", "destructive", "muted", "accent", "popover", "card",
];

export default {
  darkMode: ["class"],
  content: ["./src/**/*.{ts,tsx}"],
  theme: {
    container: { center: true, padding: "2rem", screens: { "2xl": "1400px" } },
    extend: {
      colors: {
        border: "hsl(var(--border))",
        input: "hsl(var(--input))",
        ring: "hsl(var(--ring))",
        background: "hsl(var(--background))",
        foreground: "hsl(var(--foreground))",
        ...Object.fromEntries(
          colors.map((c) => [c, { DEFAULT: `hsl(var(--${c}))`, foreground: `hsl(var(--${c}-foreground))` }])
        ),
      },
      borderRadius: {
        lg: "var(--radius)",
        md: "calc(var(--radius) - 2px)",
        sm: "calc(var(--radius) - 4px)",
      },
    },
  },
  plugins: [require("tailwindcss-animate")],
} satisfies Config;
"""

GLOBALS_CSS = """@tailwind base;
@tailwind components;
@tailwind utilities;

@layer base {
  :root {
    --background: 0 0% 100%;
    --foreground: 222.2 84% 4.9%;
    --card: 0 0% 100%;
    --card-foreground: 222.2 84% 4.9%;
    --popover: 0 0% 100%;
    --popover-foreground: 222.2 84% 4.9%;
    --primary: 222.2 47.4% 11.2%;
    --primary-foreground: 210 40% 98%;
    --secondary: 210 40% 96.1%;
    --secondary-foreground: 222.2 47.4% 11.2%;
    --muted: 210 40% 96.1%;
    --muted-foreground: 215.4 16.3% 46.9%;
    --accent: 210 40% 96.1%;
    --accent-foreground: 222.2 47.4% 11.2%;
    --destructive: 0 84.2% 60.2%;
    --destructive-foreground: 210 40% 98%;
    --border: 214.3 31.8% 91.4%;
    --input: 214.3 31.8% 91.4%;
    --ring: 222.2 84% 4.9%;
    --radius: 0.5rem;
  }
}

@layer base {
  * {
    @apply border-border;
  }
  body {
    @apply bg-background text-foreground;
  }
}
"""

UTILS_TS = """import { type ClassValue, clsx } from "clsx"
import { twMerge } from "tailwind-merge"

export function cn(...inputs: ClassValue[]) {
  return twMerge(clsx(inputs))
}
"""

GITIGNORE = """# dependencies
/node_modules
/.pnp
.pnp.js

# testing
/coverage

# next.js
/.next/
/out/

# production
/build

# misc
.DS_Store
*.pem

# debug
npm-debug.log*
yarn-debug.log*
yarn-error.log*

# local env files
.env*.local

# vercel
.vercel

# typescript
*.tsbuildinfo
next-env.d.ts
"""

POSTCSS_CONFIG = """module.exports = {
  plugins: {
    tailwindcss: {},
    autoprefixer: {},
  },
}
"""


def _layout(analysis: ProjectAnalysis) -> str:
    return f"""import type {{ Metadata }} from 'next'
import {{ Inter }} from 'next/font/google'
import './globals.css'

const inter = Inter({{ subsets: ['latin'] }})

export const metadata: Metadata = {{
  title: {json.dumps(analysis.project_name)},
  description: {json.dumps(analysis.description)},
}}

export default function RootLayout({{
  children,
}}: {{
  children: React.ReactNode
}}) {{
  return (
    <html lang="en">
      <body className={{inter.className}}>{{children}}</body>
    </html>
  )
}}
"""


def default_project_structure(
    analysis: ProjectAnalysis, database: Optional[DatabaseProject] = None
) -> List[GeneratedFile]:
    """Configuration, layout and shared files for a Next.js + Shadcn UI project."""
    files = [
        GeneratedFile("package.json", _package_json(analysis, database), "package.json with Next.js 14 dependencies"),
        GeneratedFile("next.config.js", NEXT_CONFIG, "Next.js configuration"),
        GeneratedFile("tsconfig.json", json.dumps(TSCONFIG, indent=2), "TypeScript configuration with @ alias"),
        GeneratedFile("tailwind.config.ts", TAILWIND_CONFIG, "Tailwind CSS configuration with Shadcn support"),
        GeneratedFile("components.json", json.dumps(COMPONENTS_JSON, indent=2), "Shadcn UI configuration"),
        GeneratedFile("src/app/layout.tsx", _layout(analysis), "Root layout with metadata"),
        GeneratedFile("src/app/globals.css", GLOBALS_CSS, "Global CSS with Shadcn variables"),
        GeneratedFile("src/lib/utils.ts", UTILS_TS, "className merge helper"),
        GeneratedFile(".gitignore", GITIGNORE, "Git ignore file for Next.js"),
        GeneratedFile("postcss.config.js", POSTCSS_CONFIG, "PostCSS configuration"),
    ]
    if database:
        files.extend(database_files(database))
    return files


def database_files(database: DatabaseProject) -> List[GeneratedFile]:
    """Supabase client plus an env example. The service role key is never written."""
    client = f"""import {{ createClient }} from '@supabase/supabase-js'

const supabaseUrl = process.env.NEXT_PUBLIC_SUPABASE_URL ?? '{database.connection_url}'
const supabaseAnonKey = process.env.NEXT_PUBLIC_SUPABASE_ANON_KEY ?? '{database.public_key}'

export const supabase = createClient(supabaseUrl, supabaseAnonKey)

export default supabase
"""
    env = (
        f"NEXT_PUBLIC_SUPABASE_URL={database.connection_url}\n"
        f"NEXT_PUBLIC_SUPABASE_ANON_KEY={database.public_key}\n"
        "SUPABASE_SERVICE_ROLE_KEY=\n"
    )
    return [
        GeneratedFile("src/lib/supabase.ts", client, "Supabase client configuration"),
        GeneratedFile(".env.local.example", env, "Environment variables example"),
    ]


# =============================================================================
# UI component scaffold
# =============================================================================

BUTTON_TSX = """import * as React from "react"
import { Slot } from "@radix-ui/react-slot"
import { cva, type VariantProps } from "class-variance-authority"

import { cn } from "@/lib/utils"

const buttonVariants = cva(
  "inline-flex items-center justify-center gap-2 whitespace-nowrap rounded-md text-sm font-medium ring-offset-background transition-colors focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-ring focus-visible:ring-offset-2 disabled:pointer-events-none disabled:opacity-50",
  {
    variants: {
      variant: {
        default: "bg-primary text-primary-foreground hover:bg-primary/90",
        destructive: "bg-destructive text-destructive-foreground hover:bg-destructive/90",
        outline: "border border-input bg-background hover:bg-accent hover:text-accent-foreground",
        secondary: "bg-secondary text-secondary-foreground hover:bg-secondary/80",
        ghost: "hover:bg-accent hover:text-accent-foreground",
        link: "text-primary underline-offset-4 hover:underline",
      },
      size: {
        default: "h-10 px-4 py-2",
        sm: "h-9 rounded-md px-3",
        lg: "h-11 rounded-md px-8",
        icon: "h-10 w-10",
      },
    },
    defaultVariants: {
      variant: "default",
      size: "default",
    },
  }
)

export interface ButtonProps
  extends React.ButtonHTMLAttributes<HTMLButtonElement>,
    VariantProps<typeof buttonVariants> {
  asChild?: boolean
}

const Button = React.forwardRef<HTMLButtonElement, ButtonProps>(
  ({ className, variant, size, asChild = false, ...props }, ref) => {
    const Comp = asChild ? Slot : "button"
    return <Comp className={cn(buttonVariants({ variant, size, className }))} ref={ref} {...props} />
  }
)
Button.displayName = "Button"

export { Button, buttonVariants }
"""

INPUT_TSX = """import * as React from "react"

import { cn } from "@/lib/utils"

const Input = React.forwardRef<HTMLInputElement, React.ComponentProps<"input">>(
  ({ className, type, ...props }, ref) => (
    <input
      type={type}
      className={cn(
        "flex h-10 w-full rounded-md border border-input bg-background px-3 py-2 text-base ring-offset-background placeholder:text-muted-foreground focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-ring focus-visible:ring-offset-2 disabled:cursor-not-allowed disabled:opacity-50 md:text-sm",
        className
      )}
      ref={ref}
      {...props}
    />
  )
)
Input.displayName = "Input"

export { Input }
"""

TEXTAREA_TSX = """import * as React from "react"

import { cn } from "@/lib/utils"

const Textarea = React.forwardRef<HTMLTextAreaElement, React.ComponentProps<"textarea">>(
  ({ className, ...props }, ref) => (
    <textarea
      className={cn(
        "flex min-h-[80px] w-full rounded-md border border-input bg-background px-3 py-2 text-base ring-offset-background placeholder:text-muted-foreground focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-ring focus-visible:ring-offset-2 disabled:cursor-not-allowed disabled:opacity-50 md:text-sm",
        className
      )}
      ref={ref}
      {...props}
    />
  )
)
Textarea.displayName = "Textarea"

export { Textarea }
"""

CARD_TSX = """import * as React from "react"

import { cn } from "@/lib/utils"

const Card = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => (
    <div ref={ref} className={cn("rounded-lg border bg-card text-card-foreground shadow-sm", className)} {...props} />
  )
)
Card.displayName = "Card"

const CardHeader = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => (
    <div ref={ref} className={cn("flex flex-col space-y-1.5 p-6", className)} {...props} />
  )
)
CardHeader.displayName = "CardHeader"

const CardTitle = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => (
    <div ref={ref} className={cn("text-2xl font-semibold leading-none tracking-tight", className)} {...props} />
  )
)
CardTitle.displayName = "CardTitle"

const CardDescription = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => (
    <div ref={ref} className={cn("text-sm text-muted-foreground", className)} {...props} />
  )
)
CardDescription.displayName = "CardDescription"

const CardContent = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => <div ref={ref} className={cn("p-6 pt-0", className)} {...props} />
)
CardContent.displayName = "CardContent"

const CardFooter = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => (
    <div ref={ref} className={cn("flex items-center p-6 pt-0", className)} {...props} />
  )
)
CardFooter.displayName = "CardFooter"

export { Card, CardHeader, CardFooter, CardTitle, CardDescription, CardContent }
"""

LABEL_TSX = """"use client"

import * as React from "react"
import * as LabelPrimitive from "@radix-ui/react-label"

import { cn } from "@/lib/utils"

const Label = React.forwardRef<
  React.ElementRef<typeof LabelPrimitive.Root>,
  React.ComponentPropsWithoutRef<typeof LabelPrimitive.Root>
>(({ className, ...props }, ref) => (
  <LabelPrimitive.Root
    ref={ref}
    className={cn("text-sm font-medium leading-none peer-disabled:cursor-not-allowed peer-disabled:opacity-70", className)}
    {...props}
  />
))
Label.displayName = LabelPrimitive.Root.displayName

export { Label }
"""

BADGE_TSX = """import * as React from "react"
import { cva, type VariantProps } from "class-variance-authority"

import { cn } from "@/lib/utils"

const badgeVariants = cva(
  "inline-flex items-center rounded-full border px-2.5 py-0.5 text-xs font-semibold transition-colors focus:outline-none focus:ring-2 focus:ring-ring focus:ring-offset-2",
  {
    variants: {
      variant: {
        default: "border-transparent bg-primary text-primary-foreground hover:bg-primary/80",
        secondary: "border-transparent bg-secondary text-secondary-foreground hover:bg-secondary/80",
        destructive: "border-transparent bg-destructive text-destructive-foreground hover:bg-destructive/80",
        outline: "text-foreground",
      },
    },
    defaultVariants: {
      variant: "default",
    },
  }
)

export interface BadgeProps extends React.HTMLAttributes<HTMLDivElement>, VariantProps<typeof badgeVariants> {}

function Badge({ className, variant, ...props }: BadgeProps) {
  return <div className={cn(badgeVariants({ variant }), className)} {...props} />
}

export { Badge, badgeVariants }
"""

ALERT_TSX = """import * as React from "react"
import { cva, type VariantProps } from "class-variance-authority"

import { cn } from "@/lib/utils"

const alertVariants = cva(
  "relative w-full rounded-lg border p-4 [&>svg~*]:pl-7 [&>svg]:absolute [&>svg]:left-4 [&>svg]:top-4 [&>svg]:text-foreground",
  {
    variants: {
      variant: {
        default: "bg-background text-foreground",
        destructive: "border-destructive/50 text-destructive dark:border-destructive [&>svg]:text-destructive",
      },
    },
    defaultVariants: {
      variant: "default",
    },
  }
)

const Alert = React.forwardRef<
  HTMLDivElement,
  React.HTMLAttributes<HTMLDivElement> & VariantProps<typeof alertVariants>
>(({ className, variant, ...props }, ref) => (
  <div ref={ref} role="alert" className={cn(alertVariants({ variant }), className)} {...props} />
))
Alert.displayName = "Alert"

const AlertTitle = React.forwardRef<HTMLParagraphElement, React.HTMLAttributes<HTMLHeadingElement>>(
  ({ className, ...props }, ref) => (
    <h5 ref={ref} className={cn("mb-1 font-medium leading-none tracking-tight", className)} {...props} />
  )
)
AlertTitle.displayName = "AlertTitle"

const AlertDescription = React.forwardRef<HTMLParagraphElement, React.HTMLAttributes<HTMLParagraphElement>>(
  ({ className, ...props }, ref) => (
    <div ref={ref} className={cn("text-sm [&_p]:leading-relaxed", className)} {...props} />
  )
)
AlertDescription.displayName = "AlertDescription"

export { Alert, AlertTitle, AlertDescription }
"""

UI_COMPONENTS = {
    "button": BUTTON_TSX,
    "input": INPUT_TSX,
    "textarea": TEXTAREA_TSX,
    "card": CARD_TSX,
    "label": LABEL_TSX,
    "badge": BADGE_TSX,
    "alert": ALERT_TSX,
}


def scaffold_files(analysis: Optional[ProjectAnalysis] = None) -> List[GeneratedFile]:
    """Shadcn UI components every generated page may import from @/components/ui."""
    return [
        GeneratedFile(
            file_path=f"src/components/ui/{name}.tsx",
            content=source,
            description=f"Shadcn UI {name.capitalize()} component",
        )
        for name, source in UI_COMPONENTS.items()
    ]
