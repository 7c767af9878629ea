from __future__ import annotations

from story_forge.core.generation_audit import audit_fields, audit_story


def test_clean_story_passes() -> None:
    report = audit_story(
        [
            (
                "story_1",
                {
                    "hero": "Maya Chen, a stubborn chef",
                    "logline": "Maya Chen must solve a perfect crime.",
                    "beat_Setup_StasisDeath": "Nothing changes unless she does.",
                },
            )
        ]
    )
    assert report.passed
    assert report.stories_checked == 1
    assert report.fields_checked == 3


def test_findings_name_the_problem() -> None:
    findings = audit_fields(
        "story_2",
        {
            "hero": "   ",
            "logline": "maya solves {mystery}",
            "The Secret": "an undefined secret",
        },
    )
    reasons = sorted(finding.reason for finding in findings)
    assert reasons == ["empty_text", "not_a_sentence", "placeholder:undefined", "placeholder:{mystery}"]
    assert {finding.story_id for finding in findings} == {"story_2"}


def test_report_collects_reasons_across_stories() -> None:
    report = audit_story(
        [
            ("a", {"logline": "Fine."}),
            ("b", {"beat_Finale_HighStakes": "Everything comes down to {stakes}."}),
        ]
    )
    assert not report.passed
    assert report.reasons() == ["placeholder:{stakes}"]
    assert report.findings[0].field_id == "beat_Finale_HighStakes"
