import pytest

from cfgedit.host import WidgetHost


class ScriptedHost(WidgetHost):
    """Records widget calls and replays scripted user input keyed by label."""

    def __init__(self, commits=None, presses=(), collapsed=()):
        self.commits = dict(commits or {})
        self.presses = set(presses)
        self.collapsed = set(collapsed)
        self.calls = []
        self.ids = []
        self.depth = 0

    def _record(self, kind, label, value=None):
        self.calls.append((kind, self.ids[-1] if self.ids else None, label, value))

    def _edit(self, kind, label, value):
        self._record(kind, label, value)
        if label in self.commits:
            return True, self.commits.pop(label)
        return False, value

    def push_id(self, ident):
        self.ids.append(ident)

    def pop_id(self):
        self.ids.pop()

    def text(self, label):
        self._record("text", label)

    def button(self, label):
        self._record("button", label)
        if label in self.presses:
            self.presses.discard(label)
            return True
        return False

    def checkbox(self, label, value):
        return self._edit("checkbox", label, value)

    def input_int(self, label, value):
        return self._edit("int", label, value)

    def input_float(self, label, value):
        return self._edit("float", label, value)

    def input_text(self, label, value):
        return self._edit("text_input", label, value)

    def color_edit(self, label, rgba, channels):
        self._record(f"color{channels}", label, rgba)
        if label in self.commits:
            return True, self.commits.pop(label)
        return False, rgba

    def tree_node(self, label, default_open=True):
        self._record("tree", label, default_open)
        if label in self.collapsed:
            return False
        self.depth += 1
        return True

    def tree_pop(self):
        self.depth -= 1

    # helpers
    def kinds(self):
        return [c[0] for c in self.calls]

    def ident(self, label):
        return next(c[1] for c in self.calls if c[2] == label)

    def labels(self, kind):
        return [c[2] for c in self.calls if c[0] == kind]


@pytest.fixture
def host():
    return ScriptedHost()


@pytest.fixture
def write_json(tmp_path):
    def _write(text, name="doc.json", encoding="utf-8"):
        p = tmp_path / name
        p.write_bytes(text.encode(encoding) if isinstance(text, str) else text)
        return p
    return _write
