from claimtracker.modules.workflow.methodology import (
    RTI_METHODOLOGY,
    VALIDATION_METHODOLOGY,
    numbered_titles,
    render_methodology,
)
from claimtracker.modules.workflow.prompts import RTIPrompts, ValidationPrompts, transcript

CLAIM = {
    "claim_nb_tx": "HEA-00007",
    "claim_title": "Clinic opened",
    "description": "A new clinic opened in May",
    "published_url": "http://news.example/clinic",
    "category": "Health",
}


def test_methodologies_have_expected_steps():
    assert len(VALIDATION_METHODOLOGY) == 8
    assert len(RTI_METHODOLOGY) == 9
    assert numbered_titles(RTI_METHODOLOGY).splitlines()[0] == "1. Preliminary Review"


def test_render_methodology_indents_tasks():
    rendered = render_methodology(VALIDATION_METHODOLOGY[:2])
    assert rendered.startswith("Clearly Define the Claim:\n  Identify and document:\n  - Exact wording of the claim")
    assert "\n\nVerify Through Official Sources:\n" in rendered


def test_transcript_uppercases_roles():
    text = transcript([{"role": "user", "content": "a"}, {"role": "assistant", "content": "b"}])
    assert text == "USER: a\n\nASSISTANT: b"


def test_validation_chat_system_describes_claim():
    prompt = ValidationPrompts.chat_system(CLAIM)
    assert "Claim Number: HEA-00007" in prompt
    assert "Category: Health" in prompt
    assert "politely redirect" in prompt


def test_validation_report_prompt_sections():
    prompt = ValidationPrompts.report(
        CLAIM,
        [{"role": "user", "content": "check ministry"}],
        [{"validator_username": "bob", "status": "REPORT_GENERATED", "notes": ""}],
    )
    assert prompt.index("CLAIM DETAILS:") < prompt.index("CONVERSATION HISTORY:") < prompt.index("PREVIOUS VALIDATIONS:")
    assert "USER: check ministry" in prompt
    assert "- bob: REPORT_GENERATED - " in prompt
    assert "Source: http://news.example/clinic" in prompt


def test_rti_request_prompt_without_validation():
    prompt = RTIPrompts.request(CLAIM, [])
    assert "LATEST VALIDATION REPORT" not in prompt
    assert "RTI METHODOLOGY USED:" in prompt


def test_start_prompts_render_missing_fields_blank():
    prompt = RTIPrompts.start({"claim_title": "Clinic opened"})
    assert "Comments: \n" in prompt
    assert "None" not in prompt
