"""Investigative checklists embedded into language-model prompts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class MethodologyStep:
    title: str
    tasks: tuple[str, ...]


Methodology = Sequence[MethodologyStep]


VALIDATION_METHODOLOGY: Methodology = (
    MethodologyStep(
        "Clearly Define the Claim",
        (
            "Identify and document:",
            "- Exact wording of the claim",
            "- Source and date of publication",
            "- Key details provided in the initial claim (e.g., dates, locations, names, figures)",
        ),
    ),
    MethodologyStep(
        "Verify Through Official Sources",
        (
            "Check official websites, press releases, or announcements from relevant authorities (government websites, corporate pages, official social media accounts)",
            "Look for direct confirmations or related documentation (official statements, budgets, timelines, reports)",
        ),
    ),
    MethodologyStep(
        "Cross-Reference with Independent Online Media",
        (
            "Search reputable online news organizations (local, national, international) to validate or challenge the claim",
            "Note discrepancies, additional details, or corroborating evidence reported independently",
        ),
    ),
    MethodologyStep(
        "Gather Stakeholder and Community Feedback Digitally",
        (
            "Scan social media platforms, local forums, and community discussion boards for reactions and discussions about the claim",
            "Document and verify public sentiment, eyewitness accounts, or independent photographic/video evidence shared publicly",
        ),
    ),
    MethodologyStep(
        "Review Public Records and Documentation",
        (
            "Access online transparency portals, Freedom of Information (FOI) databases, public budget reports, or inspection and compliance records",
            "Confirm that records align with the claim's stated facts and timelines",
        ),
    ),
    MethodologyStep(
        "Consult Additional Credible Third-party Sources",
        (
            "Check websites of independent authorities, industry experts, watchdog organizations, or NGOs to further substantiate or challenge the claim",
            "Identify expert opinions, analysis, or independent verification reports online",
        ),
    ),
    MethodologyStep(
        "Analyze and Document Findings",
        (
            "Clearly document evidence gathered from each step",
            "Highlight confirmations, contradictions, or gaps uncovered in verification",
        ),
    ),
    MethodologyStep(
        "Prepare a Verification Summary Report",
        (
            "Summarize the results clearly, identifying:",
            "- Verified facts",
            "- Discrepancies found",
            "- Unverifiable elements",
            "Cite all online sources with clear references (URLs, timestamps, documents)",
        ),
    ),
)


RTI_METHODOLOGY: Methodology = (
    MethodologyStep(
        "Preliminary Review",
        (
            "Read the full report carefully to gain a comprehensive understanding of the content, purpose, findings, and conclusions",
            "Note initial impressions about clarity, completeness, and transparency",
        ),
    ),
    MethodologyStep(
        "Identify the Scope and Objectives",
        (
            "Clearly understand the report's stated objectives, scope, and intended audience",
            "Document if these objectives appear fully met or if there are noticeable gaps or ambiguities",
        ),
    ),
    MethodologyStep(
        "Analyze Completeness and Transparency",
        (
            "Evaluate whether all relevant data, evidence, and supporting documentation referenced are adequately presented",
            "Identify areas that lack clear supporting details or where claims are not fully substantiated",
        ),
    ),
    MethodologyStep(
        "Cross-Check Data and References",
        (
            "Verify the references cited within the report (such as footnotes, appendices, and data tables)",
            "Determine if essential supporting documents or datasets referenced are publicly available or missing",
        ),
    ),
    MethodologyStep(
        "Highlight Missing or Unclear Information",
        (
            "Clearly document gaps, unclear conclusions, or missing evidence identified during the analysis",
            "Assess whether these gaps significantly impact the report's overall credibility or your ability to verify its claims",
        ),
    ),
    MethodologyStep(
        "Ensure Compliance with Jurisdictional RTI Laws",
        (
            "Review applicable local, provincial, or federal Right to Information laws and regulations relevant to the report",
            "Ensure that all potential RTI requests formulated comply with jurisdictional requirements and procedures",
        ),
    ),
    MethodologyStep(
        "Formulate Potential RTI Requests",
        (
            "Develop clear, specific RTI questions aimed directly at obtaining the missing or incomplete information",
            "Prioritize RTI questions based on their relevance, importance, and potential impact on understanding the report",
        ),
    ),
    MethodologyStep(
        "Evaluate Necessity and Impact",
        (
            "Critically assess if obtaining the identified information through RTI is essential to achieve clarity or transparency",
            "Decide whether an RTI request is justified or if the existing gaps are minor enough not to warrant additional action",
        ),
    ),
    MethodologyStep(
        "Document the Decision",
        (
            "Clearly document the decision-making process, highlighting:",
            "- Any RTI requests to proceed with",
            "- Rationale for why an RTI request may or may not be necessary",
            "- The anticipated outcome or benefit of submitting the request",
        ),
    ),
)


def numbered_titles(methodology: Methodology) -> str:
    return "\n".join(f"{i}. {step.title}" for i, step in enumerate(methodology, start=1))


def render_methodology(methodology: Methodology) -> str:
    """Full checklist: each title followed by its indented tasks."""
    blocks = []
    for step in methodology:
        tasks = "\n".join(f"  {task}" for task in step.tasks)
        blocks.append(f"{step.title}:\n{tasks}")
    return "\n\n".join(blocks)
