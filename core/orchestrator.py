"""
Voyager Orchestrator — Pipeline coordination for profile and search extraction.

This module ties the client, the resolvers and the output manager together
into a short sequential workflow:

  Step 1: FETCH (or LOAD SAVED RESPONSE)
      Live mode: VoyagerClient encodes the request, executes it and resolves
      the normalized response into Profile entities.
      Offline mode (--from-file): a previously saved response body is
      resolved with the same resolvers; no credentials are needed.

  Step 2: SAVE OUTPUT
      Serializes the resolved profiles to profiles.json in a timestamped
      output directory, next to extraction_results.json with run metadata.

Configuration:
    All settings are loaded from environment variables (typically via .env file).
    Required for live mode: LI_AT_COOKIE, CSRF_TOKEN (JSESSIONID_TOKEN optional).
    See config/settings.py for defaults.

Typical usage:
    orchestrator = VoyagerOrchestrator(env_file="./.env")
    if orchestrator.validate_config():
        results = orchestrator.run_profile("jane-doe")
        orchestrator.print_summary(results)
"""

import os
import traceback
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from config import DEFAULT_HEADERS, DEFAULT_SETTINGS
from voyager_shared import OutputManager

from .models import Profile
from .profile_resolver import resolve_profile_json
from .query_encoder import SearchArgs
from .search_resolver import resolve_search_json
from .voyager_client import AuthCredentials, VoyagerClient


class VoyagerOrchestrator:
    """Orchestrates profile lookups and people searches.

    Attributes:
        li_at: Value of the li_at session cookie.
        csrf_token: CSRF token (the JSESSIONID value, "ajax:...").
        jsessionid: JSESSIONID cookie value; defaults to the CSRF token.
        user_agent: User-Agent header sent with every request.
        search_query_id: queryId of the search endpoint.
        profile_query_id: queryId of the profile endpoint.
        search_count: Default page size for searches.
        save_json: Whether to write results to disk (default: True).
        debug: Whether to enable verbose output (default: False).
        output_manager: Handles timestamped output directories and retention cleanup.
    """

    def __init__(self, env_file: str = "./.env"):
        """Load configuration from a .env file and the environment.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        # Session credentials (required for live requests)
        self.li_at = os.getenv("LI_AT_COOKIE", "")
        self.csrf_token = os.getenv("CSRF_TOKEN", "")
        self.jsessionid = os.getenv("JSESSIONID_TOKEN", "")

        # Endpoint and header settings
        self.user_agent = os.getenv("USER_AGENT", DEFAULT_SETTINGS["USER_AGENT"])
        self.search_query_id = os.getenv("SEARCH_QUERY_ID", DEFAULT_SETTINGS["SEARCH_QUERY_ID"])
        self.profile_query_id = os.getenv("PROFILE_QUERY_ID", DEFAULT_SETTINGS["PROFILE_QUERY_ID"])
        self.search_count = int(os.getenv("SEARCH_COUNT", str(DEFAULT_SETTINGS["SEARCH_COUNT"])))

        # Output and processing options
        output_dir = os.getenv("OUTPUT_DIR", DEFAULT_SETTINGS["OUTPUT_DIR"])
        retention_days = int(os.getenv("OUTPUT_RETENTION_DAYS", str(DEFAULT_SETTINGS["OUTPUT_RETENTION_DAYS"])))
        self.save_json = os.getenv("SAVE_JSON", str(DEFAULT_SETTINGS["SAVE_JSON"])).lower() == "true"
        self.debug = os.getenv("DEBUG", str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true"

        self.output_manager = OutputManager(output_dir, retention_days)

    def validate_config(self, offline: bool = False) -> bool:
        """Check that the credentials needed for live requests are present.

        Args:
            offline: True when resolving a saved response; nothing is required then.

        Returns:
            True if the configuration is usable. Prints each missing value otherwise.
        """
        if offline:
            return True

        errors = []
        if not self.li_at:
            errors.append("LI_AT_COOKIE is required")
        if not self.csrf_token:
            errors.append("CSRF_TOKEN is required")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    def build_client(self, transport=None) -> VoyagerClient:
        """Create a VoyagerClient from the loaded configuration."""
        headers = dict(DEFAULT_HEADERS)
        headers["User-Agent"] = self.user_agent
        credentials = AuthCredentials(self.li_at, self.csrf_token, self.jsessionid)
        return VoyagerClient(
            credentials,
            headers=headers,
            transport=transport,
            search_query_id=self.search_query_id,
            profile_query_id=self.profile_query_id,
        )

    def run_profile(self, public_identifier: str, from_file: Optional[str] = None) -> Dict[str, Any]:
        """Resolve one profile, live or from a saved response body."""
        def fetch():
            if from_file:
                return [resolve_profile_json(Path(from_file).read_bytes(), public_identifier or None)]
            return [self.build_client().get_profile(public_identifier)]

        label = f"profile_{public_identifier or 'saved'}"
        return self._run("profile", label, fetch, from_file, {"public_identifier": public_identifier})

    def run_search(self, args: SearchArgs, from_file: Optional[str] = None) -> Dict[str, Any]:
        """Run a people search, live or from a saved response body."""
        if args.count is None:
            args = replace(args, count=self.search_count)

        def fetch():
            if from_file:
                return resolve_search_json(Path(from_file).read_bytes())
            return self.build_client().search_profiles(args)

        request = {"keywords": args.keywords, "filters": args.filters, "start": args.start, "count": args.count}
        return self._run("search", "search", fetch, from_file, request)

    def _run(
        self,
        mode: str,
        label: str,
        fetch: Callable[[], List[Profile]],
        from_file: Optional[str],
        request: Dict[str, Any],
    ) -> Dict[str, Any]:
        # Each run writes its metadata into its own folder or not at all
        self.output_manager.current_dir = None

        results = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "mode": mode,
            "request": request,
            "config": {
                "offline": bool(from_file),
                "source_file": from_file,
                "search_query_id": self.search_query_id,
                "profile_query_id": self.profile_query_id,
            },
            "success": False,
        }

        try:
            # Step 1: Fetch (or load) and resolve
            print(f"\n{'='*60}")
            print("STEP 1: LOAD SAVED RESPONSE" if from_file else "STEP 1: FETCH")
            print("="*60)
            profiles = fetch()
            print(f"  Resolved {len(profiles)} profile(s)")

            # Step 2: Save output to timestamped directory
            print(f"\n{'='*60}")
            print("STEP 2: SAVE OUTPUT")
            print("="*60)
            if self.save_json:
                self.output_manager.create_run_dir(label)
                json_path = self.output_manager.write_json("profiles.json", [p.to_dict() for p in profiles])
                results["json_path"] = json_path
                print(f"  Saved profiles: {json_path}")
            else:
                print("  Skipped (SAVE_JSON is false)")

            results["success"] = True
            results["summary"] = {
                "profiles": len(profiles),
                "names": [p.full_name for p in profiles],
                "experience": sum(len(p.experience) for p in profiles),
                "education": sum(len(p.education) for p in profiles),
                "skills": sum(len(p.skills) for p in profiles),
            }
            results["profiles"] = profiles

        except Exception as e:
            results["error"] = str(e)
            results["error_type"] = type(e).__name__
            print(f"\n  ERROR: {e}")
            if self.debug:
                traceback.print_exc()

        results["completed_at"] = datetime.now(timezone.utc).isoformat()

        # Save run metadata alongside the profiles
        if self.output_manager.current_dir:
            metadata = {k: v for k, v in results.items() if k != "profiles"}
            results_path = self.output_manager.write_json("extraction_results.json", metadata)
            print(f"\n  Results saved to: {results_path}")

        return results

    def print_summary(self, results: Dict):
        """Print a human-readable execution summary.

        Args:
            results: The dict returned by run_profile() or run_search().
        """
        print(f"\n{'='*60}")
        print("EXTRACTION COMPLETE")
        print("="*60)
        print(f"Status: {'SUCCESS' if results.get('success') else 'FAILED'}")

        for profile in results.get("profiles", []):
            print(f"\n  {profile.full_name or '(no name)'}  [{profile.public_identifier or profile.urn}]")
            if profile.headline:
                print(f"    {profile.headline}")
            if profile.location and profile.location.name:
                print(f"    Location: {profile.location.name}")
            for exp in profile.experience:
                company = f" @ {exp.company_name}" if exp.company_name else ""
                print(f"    - {exp.title}{company}")

        summary = results.get("summary", {})
        if summary:
            print(f"\nProfiles: {summary.get('profiles', 0)}")
            print(f"Experience entries: {summary.get('experience', 0)}")
            print(f"Education entries: {summary.get('education', 0)}")
            print(f"Skills: {summary.get('skills', 0)}")

        if results.get("error"):
            print(f"Error ({results.get('error_type', 'Error')}): {results['error']}")
