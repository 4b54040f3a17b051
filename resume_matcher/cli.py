"""
Resume Matcher CLI - Command line interface for resume extraction and job matching.

Usage:
    python -m resume_matcher [command] [options]

Commands:
    parse       Extract a structured profile from a resume
    match       Rank job postings against a profile
    config      Manage configuration

Examples:
    python -m resume_matcher parse resume.txt --output profile.json
    python -m resume_matcher match --profile profile.json --jobs jobs.json --top 5
    python -m resume_matcher config --set extraction.parallel true
"""

import argparse
import json
import logging
import sys

from resume_matcher.core.models import JobPosting, ResumeProfile
from resume_matcher.utils import Config


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Resume Matcher - Resume profile extraction and job match scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", help="Path to config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Extract a profile from a resume")
    parse_parser.add_argument("resume", help="Resume file (.txt, .md) or saved profile (.json)")
    parse_parser.add_argument("--output", "-o", help="Output file for profile (JSON)")

    # Match command
    match_parser = subparsers.add_parser("match", help="Match profile against jobs")
    match_parser.add_argument("--profile", "-p", required=True, help="Resume or profile file")
    match_parser.add_argument("--jobs", "-j", required=True, help="Path to jobs file (JSON)")
    match_parser.add_argument("--top", "-t", type=int, default=10, help="Show top N matches")
    match_parser.add_argument("--output", "-o", help="Output file for results (JSON)")

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Set a config value")
    config_parser.add_argument("--set-api-key", nargs=2, metavar=("PROVIDER", "KEY"), help="Set API key")
    config_parser.add_argument("--init", action="store_true", help="Initialize default config")

    # Parse arguments
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    try:
        config = Config(args.config)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else config.get_log_level(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        if args.command == "parse":
            cmd_parse(args, config)
        elif args.command == "match":
            cmd_match(args, config)
        elif args.command == "config":
            cmd_config(args, config)
        else:
            parser.print_help()

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


def load_jobs(path: str) -> list[JobPosting]:
    """Load job postings from a JSON list (or an object with a "jobs" list)."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("jobs")
    if not isinstance(data, list):
        raise ValueError(f"Jobs file must contain a list of job postings: {path}")

    jobs = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Job #{i + 1} in {path} is not an object")
        jobs.append(JobPosting.from_dict(item))
    return jobs


def _print_profile(profile: ResumeProfile) -> None:
    print("\n📋 Parsed Profile\n")
    print(f"Name: {profile.name or '-'}")
    print(f"Email: {profile.email or '-'}")
    print(f"Phone: {profile.phone or '-'}")
    print(f"Location: {profile.location or '-'}")
    print(f"Current Title: {profile.current_job_title or '-'}")
    print(f"Experience: {profile.years_of_experience} years")

    print(f"\nSkills ({len(profile.skills)}):")
    for skill in profile.skills[:10]:
        print(f"  - {skill}")

    if profile.education:
        print(f"\nEducation ({len(profile.education)}):")
        for entry in profile.education:
            print(f"  - {entry}")

    print(f"\nSummary:\n  {profile.generated_summary}")


def cmd_parse(args, config: Config):
    """Execute parse command."""
    assembler = config.build_assembler()
    profile = assembler.parse_file(args.resume)

    _print_profile(profile)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(profile.to_dict(), f, indent=2)
        print(f"\n💾 Saved profile to: {args.output}")


def cmd_match(args, config: Config):
    """Execute match command."""
    print("🎯 Matching profile against jobs...")

    profile = config.build_assembler().parse_file(args.profile)
    print(f"   Profile: {profile.name or profile.current_job_title or args.profile}")
    print(f"   Skills: {len(profile.skills)} | Experience: {profile.years_of_experience} years")

    jobs = load_jobs(args.jobs)
    print(f"   Jobs to match: {len(jobs)}")

    orchestrator = config.build_orchestrator()
    results = orchestrator.rank(profile, jobs, top=args.top)
    jobs_by_key = {job.key: job for job in jobs}

    print(f"\n📊 Top {len(results)} Matches:\n")
    print("-" * 80)

    for i, result in enumerate(results, 1):
        job = jobs_by_key[result.job_id]
        print(f"\n{i}. {job.title} @ {job.company}")
        print(f"   Location: {job.location or '-'}")
        print(f"   📈 Match: {result.match_score}%")
        print(
            f"   Skills {result.skills_match.score} | Title {result.title_match} | "
            f"Experience {result.experience_match} | Location {result.location_match}"
        )
        if result.skills_match.matched:
            print(f"   ✅ Matched Skills: {', '.join(result.skills_match.matched[:5])}")
        if result.skills_match.missing:
            print(f"   ❌ Missing Skills: {', '.join(result.skills_match.missing[:3])}")
        for reason in result.match_reasons:
            print(f"   - {reason}")

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump([r.to_dict() for r in results], f, indent=2)
        print(f"\n💾 Saved results to: {args.output}")


def cmd_config(args, config: Config):
    """Execute config command."""
    if args.init:
        config.save()
        print(f"✅ Created config at: {config.config_path}")

    elif args.show:
        print("\n📋 Current Configuration\n")
        print(json.dumps(config.masked(), indent=2))

    elif args.set:
        key, value = args.set
        # Try to parse as JSON for complex values
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config.set(key, value)
        config.save()
        print(f"✅ Set {key} = {value}")

    elif args.set_api_key:
        provider, key = args.set_api_key
        config.set_api_key(provider, key)
        print(f"✅ Set API key for {provider}")

    else:
        print("Use --show, --set, --set-api-key, or --init")


if __name__ == "__main__":
    main()
