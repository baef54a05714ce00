from insurebdd.cli import features_test_path, marker_expression


def test_marker_expression_strips_tag_prefix():
    assert marker_expression("@smoke") == "smoke"
    assert marker_expression("@smoke and not @slow") == "smoke and not slow"
    assert marker_expression("  (@auth or @e2e)  ") == "(auth or e2e)"


def test_features_test_path_walks_up_to_project_root(tmp_path):
    bdd = tmp_path / "project" / "tests" / "bdd"
    bdd.mkdir(parents=True)
    nested = tmp_path / "project" / "features" / "claims"
    nested.mkdir(parents=True)

    assert features_test_path(nested) == bdd.resolve()
    assert features_test_path(tmp_path / "project") == bdd.resolve()


def test_features_test_path_falls_back_to_start(tmp_path):
    assert features_test_path(tmp_path) == tmp_path.resolve() / "tests" / "bdd"
