"""Property-based tests for finding ordering and report aggregation.

Key properties tested:
- Report order depends only on the findings, not on their input order
- Findings are ranked ERROR, WARN, INFO, SUCCESS
- Merging per-file reports loses and invents nothing
"""

import hypothesis.strategies as st
import pytest
from hypothesis import given

from dsflint.fhir.resolver import contains_placeholder, strip_version
from dsflint.models.enums import LintKind, LintSeverity
from dsflint.models.finding import Finding, FindingLocation, LintReport, sort_findings

pytestmark = pytest.mark.property


@st.composite
def finding(draw) -> Finding:
    """Generate a finding located in one of a few files."""
    location = FindingLocation(
        file_name=draw(st.sampled_from(["ping.bpmn", "pong.bpmn", "ping.xml"])),
        element_id=draw(st.none() | st.sampled_from(["start", "send", "gateway"])),
        process_id=draw(st.none() | st.just("dsfdev_ping")),
    )
    return Finding.of(
        draw(st.sampled_from(list(LintSeverity))),
        draw(st.sampled_from(list(LintKind))),
        draw(st.text(max_size=30)),
        location,
    )


findings = st.lists(finding(), max_size=25)


class TestOrderingProperties:
    @given(items=findings, data=st.data())
    def test_order_is_independent_of_input_order(self, items, data):
        shuffled = data.draw(st.permutations(items))

        assert sort_findings(shuffled) == sort_findings(items)

    @given(items=findings)
    def test_sorting_is_idempotent(self, items):
        once = sort_findings(items)

        assert sort_findings(once) == once

    @given(items=findings)
    def test_severity_ranks_never_decrease(self, items):
        ranks = [f.severity.rank for f in LintReport.from_findings("run", items).findings]

        assert ranks == sorted(ranks)


class TestAggregationProperties:
    @given(items=findings)
    def test_counts_cover_every_finding(self, items):
        report = LintReport.from_findings("run", items)

        assert sum(report.counts().values()) == report.total == len(items)
        assert report.is_clean == all(f.is_success for f in items)

    @given(items=findings, data=st.data())
    def test_merge_keeps_every_finding(self, items, data):
        cut = data.draw(st.integers(min_value=0, max_value=len(items)))
        parts = [LintReport.from_findings("a", items[:cut]), LintReport.from_findings("b", items[cut:])]

        merged = LintReport.merge("aggregate", parts)

        assert merged.findings == LintReport.from_findings("aggregate", items).findings
        assert merged.errors == sum(p.errors for p in parts)

    @given(items=findings)
    def test_success_and_other_partition_the_report(self, items):
        report = LintReport.from_findings("run", items)

        assert len(report.success_findings()) + len(report.other_findings()) == report.total
        assert all(not f.is_success for f in report.other_findings())


class TestCanonicalProperties:
    urls = st.from_regex(r"\Ahttp://dsf\.dev/fhir/[A-Za-z]+/[a-z-]+\Z")

    @given(value=st.text(max_size=40))
    def test_strip_version_is_idempotent(self, value):
        assert strip_version(strip_version(value)) == strip_version(value)

    @given(url=urls, version=st.text(max_size=10))
    def test_strip_version_drops_version_suffix(self, url, version):
        assert strip_version(f"{url}|{version}") == url

    @given(url=urls, name=st.from_regex(r"\A[a-zA-Z][a-zA-Z0-9.]{0,10}\Z"), marker=st.sampled_from(["#", "$"]))
    def test_template_tokens_are_placeholders(self, url, name, marker):
        assert contains_placeholder(f"{url}|{marker}{{{name}}}")
        assert not contains_placeholder(f"{url}|{name}")
