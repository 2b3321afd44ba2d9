import json
import logging
import time
from functools import wraps

from flask import Flask, request, jsonify, redirect, session
from werkzeug.exceptions import RequestEntityTooLarge

import config
import gemini_service
from errors import StudioError, AuthenticationError
from image_codec import read_image_file
from studio import SessionStore

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY
app.config["MAX_CONTENT_LENGTH"] = 20 * 1024 * 1024

store = SessionStore(gemini_service, max_sessions=config.MAX_SESSIONS)


def log_in():
    session["logged_in"] = True
    session["studio_id"] = store.create()


def current_studio():
    if not session.get("logged_in"):
        raise AuthenticationError()
    studio = store.get(session.get("studio_id"))
    if studio is None:
        # Evicted, or the process restarted under a fixed secret key.
        session["studio_id"] = store.create()
        studio = store.get(session["studio_id"])
    return studio


def studio_route(view):
    """Resolve the caller's studio and turn StudioErrors into JSON responses."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            studio = current_studio()
        except AuthenticationError as e:
            return jsonify({"error": str(e)}), e.status_code
        try:
            return view(studio, *args, **kwargs)
        except StudioError as e:
            return jsonify({"error": str(e), "state": studio.to_dict()}), e.status_code
    return wrapper


def state_response(studio, **extra):
    return jsonify({"state": studio.to_dict(), **extra})


@app.errorhandler(RequestEntityTooLarge)
def too_large(_e):
    return jsonify({"error": "Image is too large"}), 413


# ── pages ──

@app.route("/")
def index():
    if session.get("logged_in"):
        return redirect("/studio")
    if config.GOOGLE_CLIENT_ID:
        google_block = '<div id="googleButton"></div>'
    else:
        google_block = GOOGLE_NOT_CONFIGURED
    return LOGIN_PAGE.replace(
        "/*__GOOGLE_CLIENT_ID__*/",
        json.dumps(config.GOOGLE_CLIENT_ID),
    ).replace("<!--__GOOGLE_BUTTON__-->", google_block)


@app.route("/studio")
def studio_page():
    if not session.get("logged_in"):
        return redirect("/")
    return STUDIO_PAGE


# ── authentication ──

@app.route("/api/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip()
    password = data.get("password") or ""

    # Placeholder check: any non-empty pair is accepted.
    if not email or not password:
        return jsonify({"error": "Please enter both email and password."}), 400

    logger.info("Native login successful for: %s", email)
    log_in()
    return jsonify({"ok": True})


@app.route("/api/login/google", methods=["POST"])
def login_google():
    data = request.get_json(silent=True) or {}
    credential = (data.get("credential") or "").strip()

    if not credential:
        return jsonify({"error": "Missing Google credential"}), 400

    # The token is not verified against Google.
    logger.info("Google Auth successful. Credential: %s", credential)
    log_in()
    return jsonify({"ok": True})


# ── studio API ──

@app.route("/api/studio")
@studio_route
def studio_state(studio):
    return state_response(studio)


@app.route("/api/studio/image", methods=["POST"])
@studio_route
def studio_upload_image(studio):
    asset = read_image_file(request.files.get("file"))
    studio.upload_main_image(asset)
    return state_response(studio)


@app.route("/api/studio/attachments", methods=["POST"])
@studio_route
def studio_add_attachment(studio):
    studio.add_attachment(read_image_file(request.files.get("file")))
    return state_response(studio)


@app.route("/api/studio/panel", methods=["POST"])
@studio_route
def studio_switch_panel(studio):
    data = request.get_json(silent=True) or {}
    studio.switch_panel(data.get("panel", ""))
    return state_response(studio)


@app.route("/api/studio/description", methods=["POST"])
@studio_route
def studio_description(studio):
    start = time.time()
    studio.generate_description()
    return state_response(studio, elapsed=round(time.time() - start, 1))


@app.route("/api/studio/sketch", methods=["POST"])
@studio_route
def studio_sketch(studio):
    start = time.time()
    studio.generate_sketch()
    return state_response(studio, elapsed=round(time.time() - start, 1))


@app.route("/api/studio/chat", methods=["POST"])
@studio_route
def studio_chat(studio):
    data = request.get_json(silent=True) or {}
    start = time.time()
    studio.send_message(data.get("prompt", ""))
    return state_response(studio, elapsed=round(time.time() - start, 1))


BASE_STYLE = r"""
  *, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }

  body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    background: #0f0f0f;
    color: #e0e0e0;
  }

  input[type=email], input[type=password], textarea {
    width: 100%;
    background: #1a1a1a;
    color: #e0e0e0;
    border: 1px solid #2a2a2a;
    border-radius: 10px;
    padding: 12px 14px;
    font-size: 0.9rem;
    font-family: inherit;
    outline: none;
    transition: border-color 0.2s;
  }
  input:focus, textarea:focus { border-color: #8b5cf6; }
  input::placeholder, textarea::placeholder { color: #555; }

  button {
    background: #8b5cf6;
    color: #fff;
    border: none;
    border-radius: 8px;
    padding: 8px 20px;
    font-size: 0.82rem;
    font-weight: 500;
    cursor: pointer;
    transition: background 0.2s, opacity 0.2s;
  }
  button:hover { background: #7c3aed; }
  button:disabled { opacity: 0.5; cursor: not-allowed; }

  .error-banner {
    border: 1px solid #ef4444;
    color: #fca5a5;
    background: #1a1111;
    border-radius: 10px;
    padding: 12px 16px;
    font-size: 0.85rem;
  }
  .hidden { display: none !important; }

  .status {
    font-size: 0.78rem;
    color: #888;
    min-height: 1.2em;
  }
  .status .timer { color: #8b5cf6; font-variant-numeric: tabular-nums; }

  .loading {
    display: flex;
    align-items: center;
    gap: 10px;
    color: #888;
  }
  .spinner {
    width: 16px; height: 16px;
    border: 2px solid #333;
    border-top-color: #8b5cf6;
    border-radius: 50%;
    animation: spin 0.8s linear infinite;
  }
  @keyframes spin { to { transform: rotate(360deg); } }
"""

GOOGLE_NOT_CONFIGURED = """\
<div class="error-banner">
  <strong>Google Sign-In Not Configured</strong>
  <p>Set GOOGLE_CLIENT_ID to enable single sign-on.</p>
</div>"""

LOGIN_PAGE = r"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Product Idea Lab</title>
<script src="https://accounts.google.com/gsi/client" async defer></script>
<style>
""" + BASE_STYLE + r"""
  body {
    min-height: 100vh;
    display: flex;
    align-items: center;
    justify-content: center;
  }

  .card {
    width: 100%;
    max-width: 420px;
    background: #141414;
    border: 1px solid #1e1e1e;
    border-radius: 16px;
    padding: 36px 32px;
    display: flex;
    flex-direction: column;
    gap: 20px;
  }

  .card h1 { font-size: 1.8rem; font-weight: 700; color: #fff; text-align: center; }
  .card h1 span { color: #8b5cf6; }
  .tagline { text-align: center; color: #888; font-size: 0.85rem; margin-top: -12px; }

  form { display: flex; flex-direction: column; gap: 14px; }
  form button { padding: 12px; font-size: 0.9rem; }

  .or {
    display: flex;
    align-items: center;
    gap: 12px;
    color: #555;
    font-size: 0.75rem;
  }
  .or::before, .or::after { content: ''; flex: 1; border-top: 1px solid #2a2a2a; }

  #googleButton { display: flex; justify-content: center; min-height: 44px; }
</style>
</head>
<body>

<div class="card">
  <h1>Product Idea <span>Lab</span></h1>
  <p class="tagline">From concept to creation.</p>

  <form id="loginForm">
    <input id="email" type="email" placeholder="Email address" autocomplete="username">
    <input id="password" type="password" placeholder="Password" autocomplete="current-password">
    <div id="loginError" class="error-banner hidden"></div>
    <button id="loginBtn" type="submit">Sign In</button>
  </form>

  <div class="or">OR</div>

  <!--__GOOGLE_BUTTON__-->
</div>

<script>
  const GOOGLE_CLIENT_ID = /*__GOOGLE_CLIENT_ID__*/;
  const loginErrorEl = document.getElementById('loginError');
  const loginBtn = document.getElementById('loginBtn');

  function showLoginError(msg) {
    loginErrorEl.textContent = msg || '';
    loginErrorEl.classList.toggle('hidden', !msg);
  }

  async function postLogin(path, body) {
    const res = await fetch(path, {
      method: 'POST',
      headers: { 'Content-Type': 'application/json' },
      body: JSON.stringify(body),
    });
    const data = await res.json();
    if (!res.ok || data.error) throw new Error(data.error || 'HTTP ' + res.status);
    window.location = '/studio';
  }

  document.getElementById('loginForm').addEventListener('submit', async e => {
    e.preventDefault();
    const email = document.getElementById('email').value.trim();
    const password = document.getElementById('password').value;
    if (!email || !password) {
      showLoginError('Please enter both email and password.');
      return;
    }
    showLoginError(null);
    loginBtn.disabled = true;
    try {
      await postLogin('/api/login', { email, password });
    } catch (err) {
      showLoginError(err.message);
    } finally {
      loginBtn.disabled = false;
    }
  });

  function handleCredentialResponse(response) {
    postLogin('/api/login/google', { credential: response.credential })
      .catch(err => showLoginError(err.message));
  }

  function initGoogle() {
    const target = document.getElementById('googleButton');
    if (!target || typeof google === 'undefined' || !google.accounts) return;
    try {
      google.accounts.id.initialize({
        client_id: GOOGLE_CLIENT_ID,
        callback: handleCredentialResponse,
      });
      google.accounts.id.renderButton(
        target,
        { theme: 'outline', size: 'large', type: 'standard', text: 'signin_with', shape: 'pill' }
      );
    } catch (err) {
      console.error('Error initializing Google Sign-In:', err);
    }
  }

  window.addEventListener('load', initGoogle);
</script>
</body>
</html>
"""

STUDIO_PAGE = r"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Product Idea Lab</title>
<style>
""" + BASE_STYLE + r"""
  body { height: 100vh; overflow: hidden; }

  .split-layout { display: flex; height: 100vh; }

  .panel {
    flex: 1;
    display: flex;
    flex-direction: column;
    height: 100vh;
    overflow: hidden;
  }

  .divider { width: 1px; background: #1e1e1e; flex-shrink: 0; }

  .viewer {
    flex: 1;
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
    padding: 32px;
    gap: 16px;
  }
  .viewer img {
    max-width: 100%;
    max-height: 80%;
    object-fit: contain;
    border-radius: 10px;
  }

  .dropzone {
    width: 100%;
    height: 100%;
    border: 2px dashed #2a2a2a;
    border-radius: 16px;
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
    gap: 6px;
    cursor: pointer;
    color: #888;
    transition: border-color 0.2s, background 0.2s;
  }
  .dropzone:hover, .dropzone.over { border-color: #8b5cf6; background: #141414; }
  .dropzone strong { color: #e0e0e0; font-size: 1.05rem; }

  .secondary-btn {
    background: #232323;
    color: #aaa;
    border: 1px solid #333;
  }
  .secondary-btn:hover { background: #2e2e2e; color: #e0e0e0; }

  .panel-header {
    padding: 16px 24px;
    border-bottom: 1px solid #1e1e1e;
    flex-shrink: 0;
  }
  .panel-header h2 { font-size: 1.1rem; font-weight: 600; color: #fff; }
  .panel-header h2 span { color: #8b5cf6; }

  .tabs { display: flex; gap: 8px; margin-top: 12px; }
  .tab-btn {
    background: transparent;
    color: #888;
    border: 1px solid #2a2a2a;
  }
  .tab-btn:hover { background: #1a1a1a; color: #e0e0e0; }
  .tab-btn.active { background: #8b5cf6; color: #fff; border-color: #8b5cf6; }

  .panel-body {
    flex: 1;
    overflow-y: auto;
    padding: 20px 24px;
    display: flex;
    flex-direction: column;
    gap: 16px;
  }

  .tab-pane { display: none; flex-direction: column; gap: 16px; flex: 1; min-height: 0; }
  .tab-pane.active { display: flex; }

  .transcript { flex: 1; overflow-y: auto; display: flex; flex-direction: column; gap: 12px; }
  .placeholder { color: #666; text-align: center; margin-top: 32px; font-size: 0.88rem; }

  .msg {
    max-width: 80%;
    padding: 10px 14px;
    border-radius: 12px;
    white-space: pre-wrap;
    word-break: break-word;
    line-height: 1.5;
    font-size: 0.88rem;
  }
  .msg.user { align-self: flex-end; background: #8b5cf6; color: #fff; }
  .msg.assistant { align-self: flex-start; background: #1a1a1a; border: 1px solid #2a2a2a; }
  .msg img { display: block; margin-top: 8px; max-width: 260px; border-radius: 8px; }

  .composer { border-top: 1px solid #1e1e1e; padding-top: 14px; display: flex; flex-direction: column; gap: 8px; }
  .attachments { display: flex; gap: 6px; }
  .attachments img { width: 48px; height: 48px; object-fit: cover; border-radius: 6px; }
  .composer-row { display: flex; gap: 8px; align-items: flex-end; }
  .composer textarea { min-height: 64px; resize: none; }

  .output-card {
    background: #1a1a1a;
    border: 1px solid #2a2a2a;
    border-radius: 10px;
    padding: 16px;
    white-space: pre-wrap;
    word-break: break-word;
    line-height: 1.6;
    font-size: 0.9rem;
  }
  .output-card h3 { font-size: 0.9rem; color: #fff; margin-bottom: 8px; }
  .output-card img { display: block; max-width: 100%; margin: 0 auto; border-radius: 8px; background: #fff; }

  .wide-btn { width: 100%; padding: 12px; font-size: 0.9rem; }
</style>
</head>
<body>

<input id="mainInput" type="file" accept="image/*" class="hidden">
<input id="attachInput" type="file" accept="image/*" class="hidden">

<div class="split-layout">

  <!-- ── LEFT: Image viewer ── -->
  <div class="panel">
    <div id="viewer" class="viewer">
      <div id="dropzone" class="dropzone">
        <strong>Upload Product Image</strong>
        <span>Click or drag and drop</span>
      </div>
      <img id="mainImage" class="hidden" alt="Main product">
      <button id="changeImage" class="secondary-btn hidden">Change Image</button>
    </div>
  </div>

  <div class="divider"></div>

  <!-- ── RIGHT: AI tools ── -->
  <div class="panel">
    <div class="panel-header">
      <h2>Product Idea <span>Lab</span></h2>
      <div class="tabs">
        <button class="tab-btn" data-panel="chat">AI Chat Edit</button>
        <button class="tab-btn" data-panel="description">Generate Description</button>
        <button class="tab-btn" data-panel="sketch">Generate Sketch</button>
      </div>
    </div>
    <div class="panel-body">
      <div id="errorBanner" class="error-banner hidden"></div>

      <div id="pane-chat" class="tab-pane">
        <div id="transcript" class="transcript"></div>
        <div id="composer" class="composer hidden">
          <div id="attachments" class="attachments"></div>
          <div class="composer-row">
            <textarea id="prompt" placeholder="e.g., 'change the background to a beach' or 'make it red'"></textarea>
            <button id="attachBtn" class="secondary-btn" title="Attach reference image">&#128206;</button>
            <button id="sendBtn">Send</button>
          </div>
          <div id="chatStatus" class="status"></div>
        </div>
      </div>

      <div id="pane-description" class="tab-pane">
        <button id="descriptionBtn" class="wide-btn">Generate Description</button>
        <div id="descriptionStatus" class="status"></div>
        <div id="descriptionOutput" class="output-card hidden">
          <h3>AI Generated Description:</h3>
          <div id="descriptionText"></div>
        </div>
      </div>

      <div id="pane-sketch" class="tab-pane">
        <button id="sketchBtn" class="wide-btn">Generate Technical Sketch</button>
        <div id="sketchStatus" class="status"></div>
        <div id="sketchOutput" class="output-card hidden">
          <h3>AI Generated Sketch:</h3>
          <img id="sketchImage" alt="Generated sketch">
        </div>
      </div>
    </div>
  </div>

</div>

<script>
  const MISSING_IMAGE = 'Please upload a main product image first.';
  const $ = id => document.getElementById(id);

  let state = {
    main_image: null, attachments: [], description: '', sketch: null,
    transcript: [], busy: {}, error: null, active_panel: 'chat',
  };
  const busy = { description: false, sketch: false, chat: false };
  let bannerOverride = null;

  // ── Timer helper ──
  function createTimer(statusEl) {
    let interval = null;
    return {
      start() {
        const t0 = Date.now();
        clearInterval(interval);
        interval = setInterval(() => {
          const s = ((Date.now() - t0) / 1000).toFixed(1);
          statusEl.innerHTML = '<span class="timer">' + s + 's</span> waiting for response...';
        }, 100);
      },
      stop() { clearInterval(interval); interval = null; }
    };
  }

  const timers = {
    chat: createTimer($('chatStatus')),
    description: createTimer($('descriptionStatus')),
    sketch: createTimer($('sketchStatus')),
  };

  function finishStatus(kind, elapsed) {
    timers[kind].stop();
    $(kind + 'Status').innerHTML = elapsed === undefined
      ? '' : 'Completed in <span class="timer">' + elapsed + 's</span>';
  }

  // ── API helpers ──
  async function api(path, options) {
    const res = await fetch(path, options);
    let data = {};
    try { data = await res.json(); } catch (e) { /* non-JSON body */ }
    if (res.status === 401) {
      window.location = '/';
      throw new Error(data.error || 'Please sign in first.');
    }
    if (data.state) {
      state = data.state;
      bannerOverride = null;
    }
    if (!res.ok || data.error) throw new Error(data.error || 'HTTP ' + res.status);
    return data;
  }

  function postJson(path, body) {
    return api(path, {
      method: 'POST',
      headers: { 'Content-Type': 'application/json' },
      body: JSON.stringify(body || {}),
    });
  }

  function postFile(path, file) {
    const form = new FormData();
    form.append('file', file);
    return api(path, { method: 'POST', body: form });
  }

  function showError(msg) {
    bannerOverride = msg;
    render();
  }

  // ── Rendering ──
  function render() {
    const hasImage = !!state.main_image;

    $('dropzone').classList.toggle('hidden', hasImage);
    $('mainImage').classList.toggle('hidden', !hasImage);
    $('changeImage').classList.toggle('hidden', !hasImage);
    if (hasImage) $('mainImage').src = state.main_image;

    document.querySelectorAll('.tab-btn').forEach(btn => {
      btn.classList.toggle('active', btn.dataset.panel === state.active_panel);
    });
    document.querySelectorAll('.tab-pane').forEach(pane => {
      pane.classList.toggle('active', pane.id === 'pane-' + state.active_panel);
    });

    const banner = bannerOverride !== null ? bannerOverride : state.error;
    $('errorBanner').classList.toggle('hidden', !banner);
    $('errorBanner').textContent = banner ? 'Error: ' + banner : '';

    renderTranscript(hasImage);

    $('composer').classList.toggle('hidden', !hasImage);
    const attEl = $('attachments');
    attEl.innerHTML = '';
    state.attachments.forEach(src => {
      const img = document.createElement('img');
      img.src = src;
      img.alt = 'attachment';
      attEl.appendChild(img);
    });
    $('sendBtn').disabled = busy.chat;
    $('sendBtn').textContent = busy.chat ? 'Editing...' : 'Send';

    $('descriptionBtn').disabled = busy.description || !hasImage;
    $('descriptionBtn').textContent = busy.description ? 'Generating...' : 'Generate Description';
    $('descriptionOutput').classList.toggle('hidden', !state.description);
    $('descriptionText').textContent = state.description || '';

    $('sketchBtn').disabled = busy.sketch || !hasImage;
    $('sketchBtn').textContent = busy.sketch ? 'Generating...' : 'Generate Technical Sketch';
    $('sketchOutput').classList.toggle('hidden', !state.sketch);
    if (state.sketch) $('sketchImage').src = state.sketch;
  }

  function renderTranscript(hasImage) {
    const el = $('transcript');
    el.innerHTML = '';

    if (state.transcript.length === 0) {
      const p = document.createElement('p');
      p.className = 'placeholder';
      p.textContent = hasImage
        ? 'Use the input below to tell the AI how to edit your image.'
        : 'Upload an image and start chatting with the AI to edit it!';
      el.appendChild(p);
    }

    state.transcript.forEach(msg => {
      const bubble = document.createElement('div');
      bubble.className = 'msg ' + msg.origin;
      const text = document.createElement('div');
      text.textContent = msg.text;
      bubble.appendChild(text);
      (msg.images || []).forEach(src => {
        const img = document.createElement('img');
        img.src = src;
        img.alt = 'Generated content';
        bubble.appendChild(img);
      });
      el.appendChild(bubble);
    });

    if (busy.chat) {
      const loading = document.createElement('div');
      loading.className = 'loading';
      loading.innerHTML = '<div class="spinner"></div>Editing image...';
      el.appendChild(loading);
    }
    el.scrollTop = el.scrollHeight;
  }

  // ── Actions ──
  async function uploadMain(file) {
    if (!file) return;
    try {
      await postFile('/api/studio/image', file);
      ['description', 'sketch', 'chat'].forEach(k => finishStatus(k));
    } catch (e) {
      bannerOverride = e.message;
    }
    render();
  }

  async function addAttachment(file) {
    if (!file) return;
    try {
      await postFile('/api/studio/attachments', file);
    } catch (e) {
      bannerOverride = e.message;
    }
    render();
  }

  async function switchPanel(panel) {
    state.active_panel = panel;
    render();
    try {
      await postJson('/api/studio/panel', { panel });
    } catch (e) {
      bannerOverride = e.message;
    }
    render();
  }

  async function generate(kind) {
    if (!state.main_image) { showError(MISSING_IMAGE); return; }
    if (busy[kind]) return;

    busy[kind] = true;
    bannerOverride = null;
    state.error = null;
    timers[kind].start();
    render();

    try {
      const data = await postJson('/api/studio/' + kind);
      finishStatus(kind, data.elapsed);
    } catch (e) {
      finishStatus(kind);
      if (!state.error) bannerOverride = e.message;
    } finally {
      busy[kind] = false;
      render();
    }
  }

  async function sendMessage() {
    const prompt = $('prompt').value.trim();
    if (!state.main_image || (!prompt && state.attachments.length === 0)) return;
    if (busy.chat) return;

    // Show the user's entry right away; the server's state replaces it on reply.
    state.transcript = state.transcript.concat([
      { origin: 'user', text: prompt, images: state.attachments.slice() },
    ]);
    state.attachments = [];
    $('prompt').value = '';
    busy.chat = true;
    bannerOverride = null;
    state.error = null;
    timers.chat.start();
    render();

    try {
      const data = await postJson('/api/studio/chat', { prompt });
      finishStatus('chat', data.elapsed);
    } catch (e) {
      finishStatus('chat');
      if (!state.error) bannerOverride = e.message;
    } finally {
      busy.chat = false;
      render();
    }
  }

  // ── Wiring ──
  $('dropzone').addEventListener('click', () => $('mainInput').click());
  $('changeImage').addEventListener('click', () => $('mainInput').click());
  $('attachBtn').addEventListener('click', () => $('attachInput').click());

  $('mainInput').addEventListener('change', e => {
    uploadMain(e.target.files[0]);
    e.target.value = '';
  });
  $('attachInput').addEventListener('change', e => {
    addAttachment(e.target.files[0]);
    e.target.value = '';
  });

  $('viewer').addEventListener('dragover', e => {
    e.preventDefault();
    $('dropzone').classList.add('over');
  });
  $('viewer').addEventListener('dragleave', () => $('dropzone').classList.remove('over'));
  $('viewer').addEventListener('drop', e => {
    e.preventDefault();
    $('dropzone').classList.remove('over');
    uploadMain(e.dataTransfer.files[0]);
  });

  document.querySelectorAll('.tab-btn').forEach(btn => {
    btn.addEventListener('click', () => switchPanel(btn.dataset.panel));
  });

  $('descriptionBtn').addEventListener('click', () => generate('description'));
  $('sketchBtn').addEventListener('click', () => generate('sketch'));
  $('sendBtn').addEventListener('click', sendMessage);
  $('prompt').addEventListener('keydown', e => {
    if (e.key === 'Enter' && !e.shiftKey) { e.preventDefault(); sendMessage(); }
  });

  api('/api/studio').then(render).catch(e => showError(e.message));
  render();
</script>
</body>
</html>
"""

if __name__ == "__main__":
    app.run(debug=True, port=config.PORT, threaded=True)
