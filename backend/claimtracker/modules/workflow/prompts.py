from __future__ import annotations

from typing import Any, Iterable, Mapping

from .methodology import (
    VALIDATION_METHODOLOGY,
    RTI_METHODOLOGY,
    numbered_titles,
    render_methodology,
)

_START_FORMATTING = """IMPORTANT FORMATTING NOTES:
1. Start with "Claim Summary:" on its own line
2. Follow with the claim summary in a new paragraph
3. Add a blank line before "{heading}:"
4. List each methodology step on a new line with proper numbering
5. End with your question about additional considerations in a new paragraph
6. Do not write this as a letter - no greetings or signatures
7. Use line breaks to separate major sections and enhance readability"""


def _v(value: Any) -> str:
    return "" if value is None else str(value)


def _field(claim: Any, name: str) -> str:
    if isinstance(claim, Mapping):
        return _v(claim.get(name))
    return _v(getattr(claim, name, None))


def transcript(messages: Iterable[Mapping[str, str]]) -> str:
    """Conversation rendered as ``ROLE: content`` blocks."""
    return "\n\n".join(f"{m['role'].upper()}: {m['content']}" for m in messages)


def _claim_details(claim: Any) -> str:
    return (
        f"Claim Title: {_field(claim, 'claim_title')}\n"
        f"Description: {_field(claim, 'description')}\n"
        f"Source: {_field(claim, 'published_url')}\n"
        f"Category: {_field(claim, 'category')}"
    )


class ValidationPrompts:
    START_PERSONA = (
        "You are a principal investigator preparing to validate an online published claim. "
        "Your responses should be to the point, friendly, and conversational as this is the start of the validation process."
    )
    REPORT_PERSONA = (
        "You are an expert fact-checker and investigator. Your task is to generate a comprehensive validation report "
        "based on the claim details, conversation history, and methodology provided."
    )
    CONCLUSION_PERSONA = "You are a fact-checker summarizing the conclusion of a validation report. Be concise and clear."

    @staticmethod
    def start(fields: Mapping[str, Any]) -> str:
        return f"""Please first summarize the following claim concisely:
Claim Number: {_field(fields, 'claim_nb_tx')}
Claim Title: {_field(fields, 'claim_title')}
Date Published: {_field(fields, 'date_published')}
Source URL: {_field(fields, 'published_url')}
Description: {_field(fields, 'description')}
Additional Comments: {_field(fields, 'comments')}

Please remind the user of the Validation Methodology that will be used to validate this claim:
{numbered_titles(VALIDATION_METHODOLOGY)}

Please structure your response in a short friendly conversational way, as you are the principal investigator guiding this validation process. You need to ask if there any other considerations before starting the validation process.

{_START_FORMATTING.format(heading="Validation Methodology")}"""

    @staticmethod
    def chat_system(claim: Any) -> str:
        return f"""You are a principal investigator helping to validate a claim. The claim details are:
Claim Number: {_field(claim, 'claim_nb_tx')}
Title: {_field(claim, 'claim_title')}
Description: {_field(claim, 'description')}
Source: {_field(claim, 'published_url')}
Category: {_field(claim, 'category')}

Your role is to help investigate this claim following our validation methodology. Be thorough but concise in your responses.
Keep the conversation focused on validating this specific claim.
If the user asks about something unrelated, politely redirect them back to the claim validation process."""

    @staticmethod
    def report(claim: Any, messages: Iterable[Mapping[str, str]], previous: Iterable[Mapping[str, Any]]) -> str:
        history = "\n".join(
            f"- {_v(p.get('validator_username'))}: {_v(p.get('status'))} - {_v(p.get('notes'))}" for p in previous
        )
        return f"""Please generate a comprehensive validation report for the following claim, taking into account the conversation history and following our structured methodology:

CLAIM DETAILS:
{_claim_details(claim)}

CONVERSATION HISTORY:
{transcript(messages)}

PREVIOUS VALIDATIONS:
{history}

VALIDATION METHODOLOGY:
{render_methodology(VALIDATION_METHODOLOGY)}

Please provide a final comprehensive report that includes:
1. A clear executive summary of the claim validation
2. Key findings from each step of the methodology
3. Evidence and sources consulted
4. Final determination (True/False/Needs More Investigation)
5. Confidence level in the determination
6. Recommendations for further verification if needed

Format the report with clear sections and bullet points for readability."""

    @staticmethod
    def conclusion(report: str) -> str:
        return f"""Based on the following validation report, please provide a one-paragraph conclusion that summarizes the final determination and confidence level:

{report}

Keep your response focused only on the conclusion, determination (True/False/Needs More Investigation), and confidence level."""


class RTIPrompts:
    CHAT_PERSONA = (
        "You are an AI assistant helping to formulate RTI (Right to Information) requests. "
        "Your job is not to generate RTI requests, but to help the user understand the claim and the RTI process. "
        "The Generate RTI Request step will do the detailed work."
    )
    REQUEST_PERSONA = (
        "You are an expert in formulating Right to Information (RTI) requests. Your task is to generate a comprehensive "
        "RTI request based on the claim details, validation history, conversation history, and methodology provided "
        "that could be used as an email to the appropriate authority."
    )

    @staticmethod
    def start(fields: Mapping[str, Any], latest_conclusion: str | None = None) -> str:
        validation = f"Latest Validation Summary:\n{latest_conclusion}\n\n" if latest_conclusion else ""
        return f"""Please first summarize the following claim concisely:
{_field(fields, 'claim_title')}
Published: {_field(fields, 'date_published')}
URL: {_field(fields, 'published_url')}
Description: {_field(fields, 'description')}
Comments: {_field(fields, 'comments')}

{validation}Please remind the user of the RTI Methodology that will be used to generate any RTI requests as necessary:
{numbered_titles(RTI_METHODOLOGY)}

Please structure your response in a short friendly conversational way, as you are the principal investigator guiding this Right to Information process. You need to ask if there any other considerations before starting the RTI process.

{_START_FORMATTING.format(heading="RTI Methodology")}"""

    @classmethod
    def chat_system(cls, claim: Any) -> str:
        return f"""{cls.CHAT_PERSONA}

The claim under discussion is:
Claim Number: {_field(claim, 'claim_nb_tx')}
{_claim_details(claim)}

Keep the conversation focused on the information this claim is missing and how it could be obtained."""

    @staticmethod
    def draft(fields: Mapping[str, Any]) -> str:
        return f"""Based on the following claim details, generate a draft RTI request:

Claim: {_field(fields, 'claim_title')}
Published: {_field(fields, 'date_published')}
URL: {_field(fields, 'published_url')}
Description: {_field(fields, 'description')}
Additional Comments: {_field(fields, 'comments')}

Please format the RTI request according to standard guidelines, including:
1. Clear subject line
2. Proper salutation
3. Brief context
4. Specific information requests
5. Time period specification
6. Relevant reference numbers
7. Closing and signature"""

    @staticmethod
    def request(claim: Any, messages: Iterable[Mapping[str, str]], latest_report: str | None = None) -> str:
        validation = f"LATEST VALIDATION REPORT:\n{latest_report}\n\n" if latest_report else ""
        return f"""Please generate a comprehensive RTI (Right to Information) request in the form of a letter or email for the following claim, taking into account the conversation history and following our structured methodology:

CLAIM DETAILS:
{_claim_details(claim)}

{validation}CONVERSATION HISTORY:
{transcript(messages)}

RTI METHODOLOGY USED:
{render_methodology(RTI_METHODOLOGY)}

Please provide a final RTI request that includes:
1. A clear subject line
2. Brief context about the claim and why information is being requested
3. Specific, well-structured information requests based on gaps identified
4. Clear timeline requirements
5. References to relevant RTI laws and regulations
6. Contact information requirements
7. Any necessary attachments or supporting documents needed

Format the request with clear sections and bullet points for readability."""
