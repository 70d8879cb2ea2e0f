"""Tests for treesink.sync.remover -- quarantining target-only entries."""

from treesink.sync.remover import remove_orphans


class TestRemoveOrphans:
    """Tests for remove_orphans()."""

    def test_target_only_file_quarantined(
        self, source, target, make_tree, make_context
    ):
        make_tree(source, {"keep.txt": "1"})
        make_tree(target, {"keep.txt": "1", "extra.txt": "2"})
        ctx = make_context(delete=True)

        remove_orphans(ctx)

        assert (target / "keep.txt").exists()
        assert not (target / "extra.txt").exists()
        assert (ctx.config.lost_and_found_path() / "extra.txt").read_text() == "2"

    def test_target_only_folder_quarantined_in_one_piece(
        self, source, target, make_tree, make_context
    ):
        make_tree(target, {"old/a.txt": "1", "old/b/c.txt": "2"})
        ctx = make_context(delete=True)

        remove_orphans(ctx)

        assert [r.path for r in ctx.results] == ["old"]
        assert (ctx.config.lost_and_found_path() / "old" / "b" / "c.txt").exists()

    def test_descends_into_common_folders(
        self, source, target, make_tree, make_context
    ):
        make_tree(source, {"shared/keep.txt": "1"})
        make_tree(target, {"shared/keep.txt": "1", "shared/deep/extra.txt": "2"})
        ctx = make_context(delete=True)

        remove_orphans(ctx)

        assert [r.path for r in ctx.results] == ["shared/deep"]
        assert (target / "shared" / "keep.txt").exists()

    def test_type_mismatch_left_for_copy_phase(
        self, source, target, make_tree, make_context
    ):
        make_tree(source, {"thing/inner.txt": "x", "other.txt": "y"})
        make_tree(target, {"thing": "file", "other.txt/sub": None})
        ctx = make_context(delete=True)

        remove_orphans(ctx)

        assert ctx.results == []
        assert (target / "thing").is_file()
        assert (target / "other.txt").is_dir()

    def test_artifacts_never_quarantined(
        self, source, target, make_tree, make_context
    ):
        make_tree(
            target,
            {"TREESINK_LOST_AND_FOUND_20230101T000000/old.txt": "1"},
        )
        ctx = make_context(delete=True)

        remove_orphans(ctx)

        assert ctx.results == []
        assert (target / "TREESINK_LOST_AND_FOUND_20230101T000000").is_dir()
        assert ctx.config.log_file_path().exists()

    def test_dry_run_logs_without_touching(
        self, source, target, make_tree, make_context, user_entries
    ):
        make_tree(target, {"extra.txt": "2", "old/a.txt": "1"})
        before = user_entries(target)
        ctx = make_context(delete=True, dry_run=True)

        remove_orphans(ctx)

        assert [r.log_line() for r in ctx.results] == [
            'DELETE: "extra.txt"',
            'DELETE: "old"',
        ]
        assert user_entries(target) == before

    def test_entries_visited_in_sorted_order(
        self, source, target, make_tree, make_context
    ):
        make_tree(target, {"c.txt": "", "a.txt": "", "b": None})
        ctx = make_context(delete=True)

        remove_orphans(ctx)

        assert [r.path for r in ctx.results] == ["a.txt", "b", "c.txt"]
