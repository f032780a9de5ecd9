import argparse
import asyncio
import logging
import sys

from promptweb.exceptions import PromptWebError
from promptweb.pipeline import PipelineConfig, PipelineLogger, Settings, run_pipeline


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a Next.js website repository from a description")
    parser.add_argument("prompt", type=str, help="What the website should be")
    parser.add_argument("--private", action="store_true", help="Create a private repository")
    parser.add_argument("--scaffold", action="store_true", help="Add Shadcn UI component files in a setup step")
    parser.add_argument("--fallback", action="store_true",
                        help="Use built-in templates when the model fails instead of aborting")
    parser.add_argument("--output", type=str, default=None, help="Also save the analysis and files to this directory")
    parser.add_argument("--branch", type=str, default=None, help="Branch to commit to (default: repository default)")
    parser.add_argument("--quiet", action="store_true", help="Only print progress and the result")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        settings = Settings.from_env()
        settings.validate()
    except PromptWebError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO), format="%(name)s: %(message)s")
    config = PipelineConfig(
        private_repository=args.private or settings.private_repository,
        include_scaffold=args.scaffold,
        fallback_on_error=args.fallback,
        output_dir=args.output,
        branch=args.branch,
        verbose=not args.quiet,
    )
    log = PipelineLogger("promptweb.cli", verbose=config.verbose)

    log.phase(f"Generating website for: {args.prompt}")
    try:
        url = asyncio.run(run_pipeline(args.prompt, log.progress, settings=settings, config=config))
    except PromptWebError as e:
        log.error(str(e))
        return 1

    log.success(f"Website ready: {url}")
    print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
