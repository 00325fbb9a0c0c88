"""End-to-end tests for publish() against an in-memory pull request."""

from prgate_core.errors import StatusPermissionError
from prgate_core.findings import ERROR, WARNING, Finding, FindingSet
from prgate_core.models import PullRequestRef, ReportComment
from prgate_core.publisher import print_shadow_report, publish
from prgate_core.renderer import render

SHA = "a" * 40

class FakeSource:
    """Keeps comments and statuses in memory, like a single GitHub PR would."""

    def __init__(self, comments=None, private=False, description=None, head_sha=SHA, deny_status=False):
        self.comments = list(comments or [])
        self.statuses = []
        self.deleted = []
        self._next_id = 100
        self._deny_status = deny_status
        self._pr = PullRequestRef(
            repo_slug="owner/repo",
            pull_request_id=1,
            head_sha=head_sha,
            base_sha="b" * 40,
            description=description,
            private=private,
        )

    def get_pull_request(self):
        return self._pr

    def get_comments(self):
        return list(self.comments)

    def create_comment(self, body):
        self._next_id += 1
        comment = ReportComment(id=self._next_id, body=body, url=f"https://example.test/{self._next_id}")
        self.comments.append(comment)
        return comment

    def update_comment(self, comment_id, body):
        for comment in self.comments:
            if comment.id == comment_id:
                comment.body = body
                return comment
        raise KeyError(comment_id)

    def delete_comment(self, comment_id):
        self.deleted.append(comment_id)
        self.comments = [c for c in self.comments if c.id != comment_id]

    def set_commit_status(self, sha, state, description, context, target_url=None):
        if self._deny_status:
            raise StatusPermissionError("403 Resource not accessible by integration")
        self.statuses.append({"sha": sha, "state": state, "description": description, "target_url": target_url})

def _errors(n):
    return FindingSet(errors=tuple(Finding(ERROR, f"Error {i}") for i in range(n)))

def _bot_comments(source, danger_id="danger"):
    return [c for c in source.comments if f'generated_by_{danger_id}"' in c.body]

class TestPublishScenarios:
    def test_first_run_with_one_error_creates_comment_and_fails_status(self):
        source = FakeSource()
        result = publish(source, _errors(1))

        assert result.action == "created"
        assert result.abort is None
        assert len(source.comments) == 1
        assert 'data-kind="Error"' in source.comments[0].body
        assert source.statuses == [
            {"sha": SHA, "state": "failure", "description": "1 error", "target_url": result.comment_url}
        ]

    def test_second_clean_run_deletes_comment_and_passes_status(self):
        source = FakeSource()
        publish(source, _errors(1))
        created_id = source.comments[0].id

        result = publish(source, FindingSet())

        assert result.action == "deleted"
        assert source.deleted == [created_id]
        assert source.comments == []
        assert source.statuses[-1]["state"] == "success"
        assert source.statuses[-1]["target_url"] is None

    def test_public_repo_without_status_access_aborts_with_count(self):
        source = FakeSource(private=False, deny_status=True)
        result = publish(source, _errors(2))

        assert result.abort is not None
        assert "Found 2 errors" in result.abort.message
        assert "write access" not in result.abort.message

    def test_private_repo_without_status_access_mentions_write_access(self):
        source = FakeSource(private=True, deny_status=True)
        result = publish(source, _errors(2))
        assert "don't have write access" in result.abort.message

    def test_no_status_access_without_errors_does_not_abort(self):
        source = FakeSource(deny_status=True)
        result = publish(source, FindingSet(warnings=(Finding(WARNING, "Big PR"),)))
        assert result.abort is None
        assert result.status.state == "success"

    def test_missing_head_sha_aborts(self):
        result = publish(FakeSource(head_sha=None), _errors(1))
        assert "Couldn't find a commit" in result.abort.message

class TestPublishInvariants:
    def test_repeated_runs_leave_exactly_one_report(self):
        source = FakeSource()
        publish(source, _errors(1))
        publish(source, _errors(3))
        publish(source, FindingSet(warnings=(Finding(WARNING, "Big PR"),)))
        assert len(_bot_comments(source)) == 1
        assert "Big PR" in _bot_comments(source)[0].body

    def test_independent_danger_ids_coexist(self):
        source = FakeSource()
        publish(source, _errors(1), danger_id="lint")
        publish(source, _errors(1), danger_id="tests")
        publish(source, FindingSet(), danger_id="tests")
        assert len(_bot_comments(source, "lint")) == 1
        assert _bot_comments(source, "tests") == []

    def test_human_comments_untouched(self):
        human = ReportComment(id=1, body="Please add tests", author="alice")
        source = FakeSource(comments=[human])
        publish(source, _errors(1))
        publish(source, FindingSet())
        assert source.comments == [human]

class TestIgnoredViolations:
    def test_ignored_error_dropped_from_report_and_status(self):
        source = FakeSource(description='Refactor\n\n> danger: ignore "Error 0"')
        result = publish(source, _errors(1))
        assert result.action == "noop"
        assert result.status.state == "success"
        assert source.comments == []

    def test_only_matching_violations_dropped(self):
        source = FakeSource(description='> danger: ignore "Error 0"')
        result = publish(source, _errors(2))
        assert result.status.description == "1 error"
        assert "Error 1" in source.comments[0].body
        assert "Error 0" not in source.comments[0].body

    def test_apply_ignores_disabled(self):
        source = FakeSource(description='> danger: ignore "Error 0"')
        result = publish(source, _errors(1), config={"apply_ignores": False})
        assert result.status.state == "failure"

class TestStickyFindings:
    def test_block_scalar_sticky_rendered_once_across_runs(self):
        findings = FindingSet.from_dict({"warnings": [{"message": "Big PR\n", "sticky": True}]})
        source = FakeSource()
        publish(source, findings)
        publish(source, findings)

        body = _bot_comments(source)[0].body
        assert "<del>Big PR</del>" not in body
        assert body.count("Big PR") == 1

    def test_sticky_resolved_after_it_stops_being_reported(self):
        source = FakeSource()
        publish(source, FindingSet.from_dict({"warnings": [{"message": "Big PR", "sticky": True}]}))
        result = publish(source, FindingSet())

        assert result.action == "updated"
        assert "<del>Big PR</del>" in _bot_comments(source)[0].body


class TestPrintShadowReport:
    def test_does_not_mutate(self, mocker):
        mocker.patch("prgate_core.publisher.console.print")
        source = FakeSource()
        print_shadow_report(source, _errors(1))
        assert source.comments == []
        assert source.statuses == []

    def test_prints_rendered_body(self, mocker):
        mock_print = mocker.patch("prgate_core.publisher.console.print")
        print_shadow_report(FakeSource(), _errors(1))
        printed = " ".join(str(c.args[0]) for c in mock_print.call_args_list)
        assert "Error 0" in printed
        assert "failure" in printed

    def test_reports_pending_delete(self, mocker):
        mock_print = mocker.patch("prgate_core.publisher.console.print")
        source = FakeSource()
        publish(source, _errors(1))
        mock_print.reset_mock()
        print_shadow_report(source, FindingSet())
        printed = " ".join(str(c.args[0]) for c in mock_print.call_args_list)
        assert "would delete 1 report comment(s)" in printed
        assert len(source.comments) == 1

    def test_reports_older_duplicates_on_update(self, mocker):
        mock_print = mocker.patch("prgate_core.publisher.console.print")
        stale = render(warnings=[], errors=[], messages=[], markdowns=[], previous_ledger={}, danger_id="danger")
        source = FakeSource(comments=[ReportComment(id=1, body=stale), ReportComment(id=2, body=stale)])

        print_shadow_report(source, _errors(1))

        printed = " ".join(str(c.args[0]) for c in mock_print.call_args_list)
        assert "would update this comment" in printed
        assert "Would delete 1 older report comment(s)." in printed
        assert source.deleted == []
