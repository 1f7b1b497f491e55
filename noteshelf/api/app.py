"""FastAPI web application for noteshelf."""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import APIRouter, Depends, FastAPI, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from noteshelf.api.auth_models import AuthResponse, LoginRequest, RegisterRequest, UserView
from noteshelf.api.errors import register_error_handlers
from noteshelf.api.note_models import NoteResponse, NotesListResponse, NoteView
from noteshelf.auth.dependencies import get_current_user
from noteshelf.database.database import SessionLocal, get_db, init_db
from noteshelf.database.seed import seed_default_user
from noteshelf.models.note import NoteInput
from noteshelf.models.user import AuthContext
from noteshelf.services.auth_service import AuthService
from noteshelf.services.notes_service import NotesService

load_dotenv()

logger = logging.getLogger(__name__)

VERSION = "0.1.0"
API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:3000")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if os.getenv("SEED_DEFAULT_USER", "False").lower() == "true":
        db = SessionLocal()
        try:
            seed_default_user(db)
        finally:
            db.close()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="noteshelf API",
    description="Personal notes with tags and pinning, scoped to the authenticated user",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

auth_router = APIRouter(prefix=f"{API_PREFIX}/auth", tags=["auth"])
notes_router = APIRouter(prefix=f"{API_PREFIX}/notes", tags=["notes"])


@app.get("/", response_class=HTMLResponse)
async def root():
    """Root endpoint with the browser client."""
    return INDEX_HTML.replace("__API_PREFIX__", API_PREFIX)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": os.getenv("ENV", "development"),
        "version": VERSION,
    }


# -------- Auth Routes --------

@auth_router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user and return a bearer token."""
    result = AuthService(db).register(payload.name, payload.email, payload.password)
    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=UserView.from_user(result.user),
    )


@auth_router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token."""
    result = AuthService(db).login(payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserView.from_user(result.user),
    )


# -------- Notes Routes --------

@notes_router.get("", response_model=NotesListResponse)
def list_notes(
    current: AuthContext = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the caller's notes, pinned first, newest first."""
    notes = NotesService(db).list(current.user_id)
    return NotesListResponse(
        message="Notes retrieved successfully",
        notes=[NoteView.from_note(n) for n in notes],
    )


@notes_router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    payload: NoteInput,
    current: AuthContext = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a note owned by the caller."""
    note = NotesService(db).create(current.user_id, payload)
    return NoteResponse(message="Note created successfully", note=NoteView.from_note(note))


@notes_router.get("/{note_id}", response_model=NoteResponse)
def get_note(
    note_id: str,
    current: AuthContext = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get one of the caller's notes."""
    note = NotesService(db).get(current.user_id, note_id)
    return NoteResponse(message="Note retrieved successfully", note=NoteView.from_note(note))


@notes_router.put("/{note_id}", response_model=NoteResponse)
def update_note(
    note_id: str,
    payload: NoteInput,
    current: AuthContext = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace the fields of one of the caller's notes."""
    note = NotesService(db).update(current.user_id, note_id, payload)
    return NoteResponse(message="Note updated successfully", note=NoteView.from_note(note))


@notes_router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(
    note_id: str,
    current: AuthContext = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete one of the caller's notes."""
    NotesService(db).delete(current.user_id, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app.include_router(auth_router)
app.include_router(notes_router)


INDEX_HTML = """
<!DOCTYPE html>
<html>
<head>
    <title>noteshelf</title>
    <style>
        body { font-family: Arial, sans-serif; max-width: 800px; margin: 50px auto; padding: 20px; }
        button { padding: 8px 16px; margin: 4px; cursor: pointer; }
        input, textarea { width: 100%; padding: 6px; margin: 4px 0; box-sizing: border-box; }
        textarea { min-height: 120px; }
        .section { margin: 20px 0; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }
        .note { border-bottom: 1px solid #eee; padding: 10px 0; }
        .pinned { background: #fffbe6; }
        .tag { display: inline-block; background: #eef; border-radius: 3px; padding: 1px 6px; margin-right: 4px; font-size: 12px; }
        .error { color: #b00; }
        .hidden { display: none; }
    </style>
</head>
<body>
    <h1>noteshelf</h1>

    <div id="auth" class="section">
        <h2>Sign in</h2>
        <input id="name" placeholder="Name (register only)">
        <input id="email" placeholder="Email">
        <input id="password" type="password" placeholder="Password">
        <button onclick="login()">Login</button>
        <button onclick="register()">Register</button>
        <div id="auth-status" class="error"></div>
    </div>

    <div id="app" class="hidden">
        <div class="section">
            <span id="whoami"></span>
            <button onclick="logout()">Logout</button>
        </div>

        <div class="section">
            <h2 id="editor-title">New note</h2>
            <input id="note-title" placeholder="Title">
            <textarea id="note-content" placeholder="Content"></textarea>
            <input id="note-tags" placeholder="Tags, comma separated">
            <label><input id="note-pinned" type="checkbox" style="width:auto"> Pinned</label>
            <div>
                <button onclick="saveNote()">Save</button>
                <button onclick="resetEditor()">Clear</button>
            </div>
            <div id="editor-status" class="error"></div>
        </div>

        <div class="section">
            <h2>Notes</h2>
            <div id="notes"></div>
        </div>
    </div>

    <script>
        const API = '__API_PREFIX__';
        let editingId = null;

        function token() { return localStorage.getItem('token'); }

        function escapeHtml(s) {
            const div = document.createElement('div');
            div.textContent = s;
            return div.innerHTML;
        }

        function describeError(data) {
            if (data.errors) {
                return data.message + ': ' + data.errors.map(e => e.field + ' - ' + e.message).join('; ');
            }
            return data.message || 'Request failed';
        }

        async function call(method, path, body) {
            const headers = { 'Content-Type': 'application/json' };
            if (token()) headers['Authorization'] = 'Bearer ' + token();
            const response = await fetch(API + path, {
                method: method,
                headers: headers,
                body: body ? JSON.stringify(body) : undefined,
            });
            if (response.status === 401 && token()) {
                logout();
            }
            const data = response.status === 204 ? {} : await response.json();
            return { ok: response.ok, data: data };
        }

        async function authenticate(path, body) {
            const status = document.getElementById('auth-status');
            status.innerHTML = '';
            const result = await call('POST', path, body);
            if (!result.ok) {
                status.innerHTML = escapeHtml(describeError(result.data));
                return;
            }
            localStorage.setItem('token', result.data.token);
            localStorage.setItem('user', JSON.stringify(result.data.user));
            show();
        }

        function login() {
            authenticate('/auth/login', {
                email: document.getElementById('email').value,
                password: document.getElementById('password').value,
            });
        }

        function register() {
            authenticate('/auth/register', {
                name: document.getElementById('name').value,
                email: document.getElementById('email').value,
                password: document.getElementById('password').value,
            });
        }

        function logout() {
            localStorage.removeItem('token');
            localStorage.removeItem('user');
            show();
        }

        function show() {
            const signedIn = !!token();
            document.getElementById('auth').classList.toggle('hidden', signedIn);
            document.getElementById('app').classList.toggle('hidden', !signedIn);
            if (signedIn) {
                const user = JSON.parse(localStorage.getItem('user') || '{}');
                document.getElementById('whoami').textContent = 'Signed in as ' + (user.name || '') + ' <' + (user.email || '') + '>';
                loadNotes();
            }
        }

        async function loadNotes() {
            const container = document.getElementById('notes');
            const result = await call('GET', '/notes');
            if (!result.ok) {
                container.innerHTML = '<p class="error">' + escapeHtml(describeError(result.data)) + '</p>';
                return;
            }
            if (result.data.notes.length === 0) {
                container.innerHTML = '<p>No notes yet.</p>';
                return;
            }
            window.notesById = {};
            container.innerHTML = result.data.notes.map(note => {
                window.notesById[note.id] = note;
                const tags = note.tags.map(t => '<span class="tag">' + escapeHtml(t) + '</span>').join('');
                return '<div class="note' + (note.isPinned ? ' pinned' : '') + '">'
                    + '<strong>' + (note.isPinned ? '&#128204; ' : '') + escapeHtml(note.title) + '</strong>'
                    + '<p>' + escapeHtml(note.content) + '</p>'
                    + '<div>' + tags + '</div>'
                    + '<small>Updated ' + new Date(note.updatedAt + 'Z').toLocaleString() + '</small><br>'
                    + '<button onclick="editNote(\\'' + note.id + '\\')">Edit</button>'
                    + '<button onclick="togglePin(\\'' + note.id + '\\')">' + (note.isPinned ? 'Unpin' : 'Pin') + '</button>'
                    + '<button onclick="deleteNote(\\'' + note.id + '\\')">Delete</button>'
                    + '</div>';
            }).join('');
        }

        function editorPayload() {
            const tags = document.getElementById('note-tags').value
                .split(',').map(t => t.trim()).filter(t => t.length > 0);
            return {
                title: document.getElementById('note-title').value,
                content: document.getElementById('note-content').value,
                tags: tags,
                isPinned: document.getElementById('note-pinned').checked,
            };
        }

        async function saveNote() {
            const status = document.getElementById('editor-status');
            status.innerHTML = '';
            const result = editingId
                ? await call('PUT', '/notes/' + editingId, editorPayload())
                : await call('POST', '/notes', editorPayload());
            if (!result.ok) {
                status.innerHTML = escapeHtml(describeError(result.data));
                return;
            }
            resetEditor();
            loadNotes();
        }

        function editNote(id) {
            const note = window.notesById[id];
            editingId = id;
            document.getElementById('editor-title').textContent = 'Edit note';
            document.getElementById('note-title').value = note.title;
            document.getElementById('note-content').value = note.content;
            document.getElementById('note-tags').value = note.tags.join(', ');
            document.getElementById('note-pinned').checked = note.isPinned;
        }

        function resetEditor() {
            editingId = null;
            document.getElementById('editor-title').textContent = 'New note';
            document.getElementById('note-title').value = '';
            document.getElementById('note-content').value = '';
            document.getElementById('note-tags').value = '';
            document.getElementById('note-pinned').checked = false;
            document.getElementById('editor-status').innerHTML = '';
        }

        async function togglePin(id) {
            const note = window.notesById[id];
            await call('PUT', '/notes/' + id, {
                title: note.title,
                content: note.content,
                tags: note.tags,
                isPinned: !note.isPinned,
            });
            loadNotes();
        }

        async function deleteNote(id) {
            if (!confirm('Delete this note?')) return;
            await call('DELETE', '/notes/' + id);
            if (editingId === id) resetEditor();
            loadNotes();
        }

        show();
    </script>
</body>
</html>
"""


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
