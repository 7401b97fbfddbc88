"""Tests for fix_names — propagation of the trusted display name."""

from __future__ import annotations

from pypimirror.core.reconciler import fix_names


class TestFixNames:
    def test_untrusted_takes_trusted_name(self, make_artifact):
        trusted = make_artifact("Foo-Bar", "1.0")
        untrusted = make_artifact("foo_bar", "1.1", trusted=False)
        assert fix_names([untrusted, trusted]) == "Foo-Bar"
        assert untrusted.name == "Foo-Bar"
        assert untrusted.metadata.trusted is False

    def test_first_trusted_wins(self, make_artifact):
        first = make_artifact("Foo", "1.0")
        second = make_artifact("FOO", "2.0")
        untrusted = make_artifact("foo", "3.0", trusted=False)
        assert fix_names([first, second, untrusted]) == "Foo"
        assert untrusted.name == "Foo"
        assert second.name == "FOO"

    def test_no_trusted_member(self, make_artifact):
        a = make_artifact("foo_bar", "1.0", trusted=False)
        b = make_artifact("Foo.Bar", "2.0", trusted=False)
        assert fix_names([a, b]) is None
        assert a.name == "foo_bar"
        assert b.name == "Foo.Bar"

    def test_only_name_changes(self, make_artifact):
        trusted = make_artifact("Foo-Bar", "1.0")
        untrusted = make_artifact("foo_bar", "1.1", trusted=False, sha256="cd" * 32)
        before = untrusted.metadata.model_copy()
        fix_names([trusted, untrusted])
        after = untrusted.metadata
        assert after.norm_name == before.norm_name
        assert after.version == before.version
        assert after.sha256 == before.sha256
        assert after.homepage == before.homepage

    def test_empty_group(self):
        assert fix_names([]) is None

    def test_idempotent(self, make_artifact):
        group = [
            make_artifact("Foo", "1.0"),
            make_artifact("foo", "2.0", trusted=False),
        ]
        fix_names(group)
        snapshot = [a.metadata.model_dump() for a in group]
        fix_names(group)
        assert [a.metadata.model_dump() for a in group] == snapshot
