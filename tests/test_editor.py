import unittest

from sshpick.editor import editor_argv, editor_command


class TestEditorArgv(unittest.TestCase):
    def test_visual_takes_precedence(self) -> None:
        self.assertEqual(editor_argv({"VISUAL": "nvim", "EDITOR": "nano"}), ["nvim"])

    def test_blank_visual_falls_through_to_editor(self) -> None:
        self.assertEqual(editor_argv({"VISUAL": "  ", "EDITOR": "emacs -nw"}), ["emacs", "-nw"])

    def test_default_is_vi(self) -> None:
        self.assertEqual(editor_argv({}), ["vi"])

    def test_unparseable_value_falls_back_to_vi(self) -> None:
        self.assertEqual(editor_argv({"EDITOR": '"'}), ["vi"])


class TestEditorCommand(unittest.TestCase):
    def test_line_jump_per_editor_family(self) -> None:
        cases = {
            "code": ["code", "--goto", "/c:12:1"],
            "cursor": ["cursor", "--goto", "/c:12:1"],
            "vim": ["vim", "+12", "/c"],
            "/usr/bin/nvim": ["/usr/bin/nvim", "+12", "/c"],
            "nano": ["nano", "+12,1", "/c"],
            "subl": ["subl", "/c:12"],
            "gedit": ["gedit", "/c"],
        }
        for editor, expected in cases.items():
            with self.subTest(editor=editor):
                self.assertEqual(editor_command("/c", 12, {"EDITOR": editor}), expected)

    def test_editor_arguments_are_kept_before_line_args(self) -> None:
        cmd = editor_command("/c", 3, {"VISUAL": "code --wait"})
        self.assertEqual(cmd, ["code", "--wait", "--goto", "/c:3:1"])

    def test_line_is_at_least_one(self) -> None:
        self.assertEqual(editor_command("/c", 0, {"EDITOR": "vi"}), ["vi", "+1", "/c"])


if __name__ == "__main__":
    unittest.main()
