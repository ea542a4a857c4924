"""CLI Runner — run a scripted intake from the command line.

Usage:
    # Route automatically, chat once, draft and submit:
    python -m firdesk.runner --text "I got a call asking for my OTP and lost money from UPI"

    # Pick the agent and language explicitly, then run the AI investigation:
    python -m firdesk.runner --text "Someone stole my bike" --agent general --language hi-IN --investigate

Without LLM_API_KEY configured every AI step returns its offline placeholder.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from firdesk.core.models import Report


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
        datefmt="%H:%M:%S",
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def run_intake(text: str, language: str, agent_id: str | None, investigate_case: bool) -> Report | None:
    """Execute language → agent → one chat turn → draft → commit [→ investigate]."""
    from firdesk.agents.conversation import ConversationSession
    from firdesk.agents.drafting import commit_report, draft_report
    from firdesk.agents.intake_router import IntakeRouter
    from firdesk.agents.investigation import investigate
    from firdesk.core.llm_gateway import get_gateway
    from firdesk.infrastructure.report_store import get_report_store

    gateway = get_gateway()
    store = get_report_store()

    print("\n" + "=" * 70)
    print("  FIR Intake — scripted run" + ("  [offline mode]" if gateway.offline else ""))
    print("=" * 70 + "\n")

    session = ConversationSession(gateway=gateway)
    session.select_language(language)

    if agent_id:
        session.select_agent(agent_id, initial_text=text)
    else:
        agent = IntakeRouter().route_request(text)
        if agent is None:
            print("[ERROR] Incident description is empty.")
            return None
        print(f"[ROUTE] → {agent.name} ({agent.department_role})")
        session.select_agent(agent, initial_text=text)

    print("\n💬 Conversation:")
    for m in session.messages:
        lang = f" [{m.language_code}]" if m.language_code else ""
        print(f"   {m.speaker.value.upper():8}{lang}: {m.text}")

    draft = draft_report(session, gateway)
    report = commit_report(draft, session.evidence, existing_ids=store.ids())
    if report is None:
        print("\n[ERROR] Draft has no title; nothing submitted.")
        return None
    store.add(report)
    print(f"\n[OK] FIR submitted. Ref ID: {report.id}")

    if investigate_case:
        report = investigate(report, store.all(), gateway)
        store.replace(report)

    _print_report(report)
    return report


def _print_report(report: Report) -> None:
    """Pretty-print a report and any investigation results."""
    print("\n" + "=" * 70)
    print(f"  {report.id} — {report.title}")
    print("=" * 70)
    print(f"   Status:    {report.status.value}")
    print(f"   Category:  {report.category or 'Unclassified'}")
    print(f"   Location:  {report.location}")
    print(f"   Date:      {report.date_of_incident}")
    if report.suggested_sections:
        print(f"   Sections:  {', '.join(report.suggested_sections)}")
    print(f"\n📝 Description:\n   {report.description}")

    analysis = report.ai_analysis
    if analysis:
        print(f"\n🧠 AI Analysis (severity {analysis.severity_score:.1f}/10):")
        print(f"   {analysis.summary}")
        for step in analysis.investigation_steps:
            print(f"   → {step}")

    inv = report.investigation_report
    if inv:
        if inv.suspects:
            print(f"\n🕵️  Suspects ({len(inv.suspects)}):")
            for s in inv.suspects:
                print(f"   • {s.name} [{s.status.value}] {s.confidence:.0f}% — {s.description}")
        if inv.timeline:
            print(f"\n🎥 Timeline ({len(inv.timeline)}):")
            for t in inv.timeline:
                print(f"   {t.time}  {t.location} ({t.source.value}): {t.description}")
        if inv.similar_cases:
            print(f"\n🔗 Similar Cases ({len(inv.similar_cases)}):")
            for c in inv.similar_cases:
                print(f"   • {c.report_id} {c.title} ({c.similarity_score:.0f}%): {c.reason}")
        for c in inv.contradictions:
            print(f"   ⚠️  {c}")
        for i in inv.advanced_insights:
            print(f"   💡 {i}")

    print()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="FIR Desk intake runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m firdesk.runner --text "My car was hit by a truck on MG Road"
  python -m firdesk.runner --text "Someone is stalking me" --language ta-IN --investigate
        """,
    )
    parser.add_argument("--text", required=True, help="Incident description (first citizen message)")
    parser.add_argument(
        "--language",
        choices=["en-IN", "hi-IN", "te-IN", "ta-IN", "ml-IN"],
        default="en-IN",
        help="Conversation language code (default: en-IN)",
    )
    parser.add_argument(
        "--agent",
        choices=["general", "cyber", "traffic", "women", "narcotics"],
        help="Skip smart routing and open the conversation with this agent",
    )
    parser.add_argument("--investigate", action="store_true", help="Run the AI investigation after submitting")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--output", help="Save the final report JSON to this file path")

    args = parser.parse_args()
    _setup_logging(args.verbose)

    report = run_intake(args.text, args.language, args.agent, args.investigate)
    if report is None:
        sys.exit(1)

    if args.output:
        p = Path(args.output)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(report.model_dump_json(indent=2), encoding="utf-8")
        print(f"[OK] Report saved to {p}")

    print("[DONE]")


if __name__ == "__main__":
    main()
