from __future__ import annotations

import logging, math, tkinter as tk
from pathlib import Path
from tkinter import colorchooser, filedialog
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import customtkinter as ctk
import pyperclip
from PIL import ImageTk

from .colors import RGBA, from_hex, to_hex
from .config import Settings
from .host import WidgetHost
from .icon import make_icon_image
from .session import OPEN_HINT, DocumentSession, DocumentState
from .values import dumps

logger = logging.getLogger(__name__)

# ------------- App Constants -------------
APP_TITLE = "cfgedit"
CARD_BG   = ("gray92", "gray14")
TEXT_MUT  = ("gray35", "gray70")
LABEL_W   = 180
ENTRY_W   = 220

# =======================================================
#                        Tooltips
# =======================================================
class HoverTip:
    def __init__(self, parent: tk.Misc, text: str):
        self.parent = parent; self.text = text; self.top = None
        parent.bind("<Enter>", self._show, add="+")
        parent.bind("<Leave>", self._hide, add="+")
        parent.bind("<ButtonPress>", self._hide, add="+")
    def _show(self, e=None):
        if self.top: return
        self.top = ctk.CTkToplevel(self.parent)
        self.top.overrideredirect(True)
        self.top.attributes("-topmost", True)
        ctk.CTkLabel(self.top, text=self.text, wraplength=380, justify="left").pack(ipadx=10, ipady=6)
        x = self.parent.winfo_rootx()
        y = self.parent.winfo_rooty() + self.parent.winfo_height() + 6
        self.top.geometry(f"+{x}+{y}")
    def _hide(self, e=None):
        if self.top:
            self.top.destroy()
            self.top = None

# =======================================================
#              Retained-mode widget host
# =======================================================
def _parse_int(text: str) -> int:
    return int(text.strip())

def _parse_float(text: str) -> float:
    v = float(text.strip())
    if not math.isfinite(v):
        raise ValueError(f"not a finite number: {text!r}")
    return v

def _set_entry(entry: ctk.CTkEntry, text: str) -> None:
    entry.delete(0, "end"); entry.insert(0, text)

class _Slot:
    __slots__ = ("kind", "frame", "row", "widgets", "value", "editing")
    def __init__(self, kind: str, frame):
        self.kind = kind; self.frame = frame; self.row = None
        self.widgets: Dict[str, Any] = {}
        self.value: Any = None
        self.editing = False

# Widgets live across frames keyed by (id stack, kind, label); each frame
# re-grids them in call order and destroys the ones nobody asked for.
class TkHost(WidgetHost):
    def __init__(self, root: tk.Misc, body: tk.Misc, toolbar: tk.Misc, request_frame: Callable[[], None]):
        self.root = root
        self.body = body
        self.toolbar = toolbar
        self._request_frame = request_frame
        self._slots: Dict[tuple, _Slot] = {}
        self._pending: Dict[tuple, Any] = {}
        self._open: Dict[tuple, bool] = {}
        self._seen: set = set()
        self._ids: List[int] = []
        self._parents: List[tk.Misc] = [body]
        self._rows: Dict[str, int] = {}
        self._button_col = 0

    # ---- frame ----
    def begin_frame(self) -> None:
        self._seen = set(); self._ids = []; self._parents = [self.body]
        self._rows = {}; self._button_col = 0

    def end_frame(self) -> None:
        for key in [k for k in self._slots if k not in self._seen]:
            self._destroy(self._slots.pop(key))
            self._pending.pop(key, None)

    def clear(self) -> None:
        for slot in self._slots.values():
            self._destroy(slot)
        self._slots.clear(); self._pending.clear(); self._open.clear()

    def _destroy(self, slot: _Slot) -> None:
        # children go down with their tree node's frame
        if slot.frame.winfo_exists():
            slot.frame.destroy()

    def _commit(self, key: tuple, value: Any) -> None:
        self._pending[key] = value
        self._request_frame()

    def _take(self, key: tuple, current: Any) -> Tuple[bool, Any]:
        if key in self._pending:
            return True, self._pending.pop(key)
        return False, current

    def _slot(self, kind: str, label: str, build: Callable[[tuple, _Slot, str], None]) -> Tuple[tuple, _Slot]:
        key = (tuple(self._ids), kind, label)
        self._seen.add(key)
        parent = self._parents[-1]
        slot = self._slots.get(key)
        if slot is None:
            frame = ctk.CTkFrame(parent, fg_color="transparent")
            frame.grid_columnconfigure(1, weight=1)
            slot = _Slot(kind, frame)
            build(key, slot, label)
            self._slots[key] = slot
        row = self._rows.get(str(parent), 0)
        self._rows[str(parent)] = row + 1
        if slot.row != row:
            slot.frame.grid(row=row, column=0, sticky="ew", pady=1)
            slot.row = row
        return key, slot

    # ---- ids ----
    def push_id(self, ident: int) -> None:
        self._ids.append(ident)

    def pop_id(self) -> None:
        self._ids.pop()

    # ---- primitives ----
    def text(self, label: str) -> None:
        def build(key, slot, label):
            ctk.CTkLabel(slot.frame, text=label, anchor="w", text_color=TEXT_MUT).grid(row=0, column=0, sticky="w", padx=4)
        self._slot("text", label, build)

    def button(self, label: str) -> bool:
        key = (tuple(self._ids), "button", label)
        self._seen.add(key)
        slot = self._slots.get(key)
        if slot is None:
            btn = ctk.CTkButton(self.toolbar, text=label, width=90, corner_radius=12,
                                command=lambda: self._commit(key, True))
            slot = _Slot("button", btn)
            self._slots[key] = slot
        col = self._button_col; self._button_col += 1
        if slot.row != col:
            slot.frame.grid(row=0, column=col, padx=4, pady=4)
            slot.row = col
        return self._take(key, False)[0]

    def checkbox(self, label: str, value: bool) -> Tuple[bool, bool]:
        def build(key, slot, label):
            var = tk.BooleanVar(value=bool(value))
            ctk.CTkCheckBox(slot.frame, text=label, variable=var, onvalue=True, offvalue=False,
                            command=lambda: self._commit(key, bool(var.get()))).grid(row=0, column=0, sticky="w", padx=4)
            slot.widgets["var"] = var
        key, slot = self._slot("checkbox", label, build)
        changed, new = self._take(key, value)
        if slot.value is not new:
            slot.widgets["var"].set(bool(new))
            slot.value = new
        return changed, new

    def _entry(self, kind: str, label: str, value: Any, parse: Callable[[str], Any], show: Callable[[Any], str]):
        def build(key, slot, label):
            ctk.CTkLabel(slot.frame, text=label, anchor="w", width=LABEL_W).grid(row=0, column=0, sticky="w", padx=4)
            ent = ctk.CTkEntry(slot.frame, width=ENTRY_W)
            ent.grid(row=0, column=1, sticky="ew", padx=4)
            def focus_in(_e=None):
                slot.editing = True
            def commit(_e=None):
                try:
                    new = parse(ent.get())
                except ValueError:
                    # input the control cannot coerce is dropped
                    _set_entry(ent, show(slot.value)); return
                if new != slot.value or type(new) is not type(slot.value):
                    self._commit(key, new)
                _set_entry(ent, show(new))
            def focus_out(_e=None):
                commit(); slot.editing = False
            ent.bind("<FocusIn>", focus_in)
            ent.bind("<Return>", commit)
            ent.bind("<KP_Enter>", commit)
            ent.bind("<FocusOut>", focus_out)
            slot.widgets["entry"] = ent
        key, slot = self._slot(kind, label, build)
        changed, new = self._take(key, value)
        stale = slot.value != new or type(slot.value) is not type(new)
        if stale and not slot.editing:
            _set_entry(slot.widgets["entry"], show(new))
        slot.value = new
        return changed, new

    def input_int(self, label: str, value: int) -> Tuple[bool, int]:
        return self._entry("int", label, value, _parse_int, str)

    def input_float(self, label: str, value: float) -> Tuple[bool, float]:
        return self._entry("float", label, value, _parse_float, repr)

    def input_text(self, label: str, value: str) -> Tuple[bool, str]:
        return self._entry("text", label, value, str, str)

    def color_edit(self, label: str, rgba: RGBA, channels: int) -> Tuple[bool, RGBA]:
        def build(key, slot, label):
            ctk.CTkLabel(slot.frame, text=label, anchor="w", width=LABEL_W).grid(row=0, column=0, sticky="w", padx=4)
            row = ctk.CTkFrame(slot.frame, fg_color="transparent")
            row.grid(row=0, column=1, sticky="w", padx=4)
            def pick():
                cur = slot.value or (0.0, 0.0, 0.0, 1.0)
                _, hx = colorchooser.askcolor(color=to_hex(cur), title=label, parent=self.root)
                if hx:
                    self._commit(key, from_hex(hx, alpha=cur[3]))
            swatch = ctk.CTkButton(row, text="", width=56, height=24, border_width=1, command=pick)
            swatch.pack(side="left")
            info = ctk.CTkLabel(row, text="", text_color=TEXT_MUT)
            info.pack(side="left", padx=(8, 0))
            slot.widgets.update(swatch=swatch, info=info)
            if channels == 4:
                def on_alpha(v):
                    cur = slot.value or (0.0, 0.0, 0.0, 1.0)
                    self._commit(key, (cur[0], cur[1], cur[2], float(v)))
                alpha = ctk.CTkSlider(row, from_=0.0, to=1.0, number_of_steps=255, width=140, command=on_alpha)
                alpha.pack(side="left", padx=(8, 0))
                HoverTip(alpha, "Alpha")
                slot.widgets["alpha"] = alpha
        key, slot = self._slot(f"color{channels}", label, build)
        changed, new = self._take(key, rgba)
        shown = tuple(new)
        if slot.value != shown:
            hx = to_hex(shown)
            slot.widgets["swatch"].configure(fg_color=hx, hover_color=hx)
            slot.widgets["info"].configure(text=hx if channels == 3 else f"{hx}  a={shown[3]:.2f}")
            if "alpha" in slot.widgets:
                slot.widgets["alpha"].set(shown[3])
            slot.value = shown
        return changed, new

    # ---- groups ----
    def _toggle(self, key: tuple) -> None:
        self._open[key] = not self._open.get(key, True)
        self._request_frame()

    def tree_node(self, label: str, default_open: bool = True) -> bool:
        def build(key, slot, label):
            header = ctk.CTkButton(slot.frame, text=label, anchor="w", height=24, fg_color="transparent",
                                   text_color=("gray10", "gray90"), hover_color=("gray80", "gray25"),
                                   command=lambda: self._toggle(key))
            header.grid(row=0, column=0, columnspan=2, sticky="ew")
            body = ctk.CTkFrame(slot.frame, fg_color="transparent")
            body.grid(row=1, column=0, columnspan=2, sticky="ew", padx=(18, 0))
            body.grid_columnconfigure(0, weight=1)
            slot.widgets.update(header=header, body=body)
        key, slot = self._slot("tree", label, build)
        is_open = self._open.setdefault(key, default_open)
        if slot.value is not is_open:
            slot.widgets["header"].configure(text=("▾ " if is_open else "▸ ") + label)
            if is_open: slot.widgets["body"].grid()
            else: slot.widgets["body"].grid_remove()
            slot.value = is_open
        if is_open:
            self._parents.append(slot.widgets["body"])
        return is_open

    def tree_pop(self) -> None:
        self._parents.pop()

# =======================================================
#                           GUI
# =======================================================
def _center(win, w=800, h=600):
    win.update_idletasks()
    sw, sh = win.winfo_screenwidth(), win.winfo_screenheight()
    x, y = (sw - w)//2, (sh - h)//2
    win.geometry(f"{w}x{h}+{max(0,x)}+{max(0,y)}")

# App entry: window, toolbar, frame loop, shortcuts.
def run_gui(path: Optional[str] = None, settings: Optional[Settings] = None):
    settings = settings or Settings()
    ctk.set_default_color_theme(settings.color_theme)
    ctk.set_appearance_mode(settings.appearance_mode)

    root = ctk.CTk()
    root.title(APP_TITLE)
    _center(root, w=settings.window_width, h=settings.window_height)
    icon_photo = ImageTk.PhotoImage(make_icon_image())
    root.iconphoto(True, icon_photo)

    # Top: shell actions + document actions
    top = ctk.CTkFrame(root, corner_radius=16, fg_color=CARD_BG)
    top.pack(fill="x", padx=12, pady=(12,6))
    top.grid_columnconfigure(0, weight=1)
    controls = ctk.CTkFrame(top, fg_color="transparent")
    controls.grid(row=0, column=0, sticky="w", padx=8, pady=4)
    doc_btns = ctk.CTkFrame(top, fg_color="transparent")
    doc_btns.grid(row=0, column=1, sticky="e", padx=8, pady=4)

    body = ctk.CTkScrollableFrame(root, corner_radius=16, fg_color=CARD_BG)
    body.pack(fill="both", expand=True, padx=12, pady=6)
    body.grid_columnconfigure(0, weight=1)

    # footer
    status = ctk.CTkFrame(root, corner_radius=12, fg_color=CARD_BG)
    status.pack(fill="x", padx=12, pady=(6,12))
    status_var = tk.StringVar(value="Ready")
    ctk.CTkLabel(status, textvariable=status_var, text_color=TEXT_MUT).pack(side="left", padx=10, pady=6)
    badge = ctk.CTkImage(make_icon_image(), size=(16,16))
    ctk.CTkLabel(status, image=badge, text="  " + APP_TITLE, compound="left").pack(side="right", padx=10, pady=6)

    session = DocumentSession(settings.format_config())
    _frame = {"pending": False}

    def request_frame():
        if _frame["pending"]: return
        _frame["pending"] = True
        root.after_idle(tick)

    host = TkHost(root, body, doc_btns, request_frame)

    def refresh_chrome():
        name = Path(session.path).name if session.path else ""
        root.title(f"{APP_TITLE} - {name}{' *' if session.modified else ''}" if name else APP_TITLE)
        if session.state is DocumentState.EMPTY:
            status_var.set("Ready")
        elif session.error is not None:
            status_var.set(str(session.error))
        else:
            status_var.set(f"Loaded: {name}" + (" (modified)" if session.modified else ""))

    def tick():
        _frame["pending"] = False
        before = (session.state, session.path, id(session.root))
        host.begin_frame()
        try:
            session.render_frame(host)
        finally:
            host.end_frame()
        refresh_chrome()
        # a button may have swapped the document mid-frame; draw the new one
        if (session.state, session.path, id(session.root)) != before:
            request_frame()

    def open_paths(paths: Iterable):
        paths = [p for p in paths if p]
        if not paths: return
        host.clear()
        session.open_first(paths)
        request_frame()

    def do_open():
        picked = filedialog.askopenfilenames(filetypes=[("JSON", "*.json"), ("All files", "*.*")])
        open_paths(root.tk.splitlist(picked) if isinstance(picked, str) else picked)

    def do_save():
        session.save(); request_frame()

    def do_reload():
        session.reload(); request_frame()

    def _fast_copy(text: str) -> bool:
        try:
            pyperclip.copy(text); return True
        except pyperclip.PyperclipException as ex:
            logger.debug("pyperclip unavailable: %s", ex)
        try:
            root.clipboard_clear(); root.clipboard_append(text); return True
        except tk.TclError:
            return False

    def copy_json():
        if not session.loaded:
            status_var.set("Nothing to copy"); return
        try:
            text = dumps(session.root, session.format_config)
        except ValueError as ex:
            logger.error("Cannot serialize document: %s", ex)
            status_var.set("Copy failed"); return
        status_var.set("Copied ✓" if _fast_copy(text) else "Copy failed")

    open_btn = ctk.CTkButton(controls, text="Open...", command=do_open, corner_radius=12, width=90)
    open_btn.grid(row=0, column=0, padx=4)
    HoverTip(open_btn, OPEN_HINT)
    copy_btn = ctk.CTkButton(controls, text="Copy JSON", command=copy_json, corner_radius=12, width=100)
    copy_btn.grid(row=0, column=1, padx=4)
    HoverTip(copy_btn, "Copy the document as it would be saved (Ctrl+Shift+C).")

    # shortcuts
    root.bind("<Control-o>", lambda e: (do_open(), "break"))
    root.bind("<Control-s>", lambda e: (do_save(), "break"))
    root.bind("<Control-r>", lambda e: (do_reload(), "break"))
    root.bind("<Control-Shift-C>", lambda e: (copy_json(), "break"))

    if path:
        open_paths([path])
    request_frame()
    root.mainloop()
