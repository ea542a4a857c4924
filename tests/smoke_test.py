"""Quick smoke test — runs the intake chain in offline mode to verify wiring."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from firdesk.agents.conversation import ConversationSession
from firdesk.agents.drafting import commit_report, draft_report
from firdesk.agents.intake_router import IntakeRouter
from firdesk.agents.investigation import investigate
from firdesk.config import Settings
from firdesk.core.llm_gateway import AIGateway
from firdesk.infrastructure.report_store import ReportStore

settings = Settings(llm_api_key="")
gateway = AIGateway(settings=settings)
store = ReportStore()

# Test routing
router = IntakeRouter()
for text in [
    "I got a call asking for my OTP and lost money from UPI",
    "My car was hit by a truck",
    "Someone is stalking me",
    "A dealer sells weed near the park",
    "My shop window was smashed",
]:
    print(f"[OK] Route: {router.route(text):10} <- {text}")

# Test conversation
session = ConversationSession(gateway=gateway)
session.select_language("hi-IN")
greeting = session.select_agent(router.route_request("I lost money from UPI"))
print(f"[OK] Greeting: {greeting.text}")
session.send_message("They asked for my OTP")
session.attach_evidence(b"\x89PNG", "image/png", "screenshot.png")
print(f"[OK] Conversation: {len(session.messages)} messages, {len(session.evidence)} evidence")

# Test drafting and commit
draft = draft_report(session, gateway)
report = commit_report(draft, session.evidence, existing_ids=store.ids(), settings=settings)
store.add(report)
print(f"[OK] Committed {report.id}: {report.title}")

# Test investigation graph
enriched = investigate(report, store.all(), gateway, settings)
store.replace(enriched)
inv = enriched.investigation_report
print(f"[OK] Investigation: status={enriched.status.value}, severity={enriched.ai_analysis.severity_score}")
print(f"     {len(inv.suspects)} suspects, {len(inv.timeline)} timeline events, {len(inv.similar_cases)} similar cases")
print(f"[OK] Store stats: {store.stats()}")

print("\n=== ALL SMOKE TESTS PASSED ===")
