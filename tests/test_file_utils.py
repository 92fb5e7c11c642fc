"""Tests for filesystem helpers"""

from datetime import datetime
from unittest.mock import patch

from component_deploy.utils.file_utils import chown_recursive, create_unique_directory


class TestChownRecursive:

    @patch("component_deploy.utils.file_utils.shutil.chown")
    def test_continues_past_failures(self, mock_chown, tmp_path):
        tree = tmp_path / "lobbyapi"
        (tree / "lobbyapi-1.0.0").mkdir(parents=True)
        (tree / "lobbyapi-1.0.0" / "lobbyapi.war").write_text("x")
        (tree / "notes.txt").write_text("x")
        mock_chown.side_effect = [PermissionError("denied"), None, None, None]

        assert chown_recursive(tree, "tomcat", "services") is False
        assert mock_chown.call_count == 4

    @patch("component_deploy.utils.file_utils.shutil.chown")
    def test_symlinks_are_not_followed(self, mock_chown, tmp_path):
        tree = tmp_path / "lobbyapi"
        (tree / "lobbyapi-1.0.0").mkdir(parents=True)
        (tree / "lobbyapi").symlink_to("lobbyapi-1.0.0", target_is_directory=True)

        assert chown_recursive(tree, "tomcat", None)
        chowned = {call.args[0] for call in mock_chown.call_args_list}
        assert tree / "lobbyapi" not in chowned

    @patch("component_deploy.utils.file_utils.shutil.chown")
    def test_no_owner_is_a_no_op(self, mock_chown, tmp_path):
        assert chown_recursive(tmp_path, None, None)
        mock_chown.assert_not_called()


def test_unique_directory_suffix(tmp_path):
    template = str(tmp_path / "deposit_plugins_%Y%m%d%H%M")
    now = datetime(2025, 3, 14, 9, 26)

    first = create_unique_directory(template, now)
    second = create_unique_directory(template, now)

    assert first.name == "deposit_plugins_202503140926"
    assert second.name == "deposit_plugins_202503140926-1"
    assert second.is_dir()
