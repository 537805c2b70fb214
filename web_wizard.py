#!/usr/bin/env python3
"""
Web-based Construction Task Wizard

Features:
- Step-by-step intake, one question at a time
- Ranked, estimated task plan once every answer is in
- Include/exclude toggles per task (completed tasks stay disabled)
- Commit of the selected tasks to the task store

Run:
    python3 web_wizard.py

Then open: http://localhost:5002
"""

import asyncio
import logging
import secrets
import sys
import threading
from pathlib import Path

from flask import Flask, render_template_string, request, jsonify

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from task_wizard.agents.task_wizard_agent import TaskWizardAgent
from task_wizard.builders.task_store import TaskStoreError, create_task_store_client, seed_from_project
from task_wizard.config import load_config
from task_wizard.logging_config import setup_logging

config = load_config(Path(__file__).resolve().parent / ".env")
setup_logging(config.log_level, config.log_format)
logger = logging.getLogger("web_wizard")

app = Flask(__name__)
app.secret_key = secrets.token_hex(16)

# Store wizard sessions per session_id
sessions = {}
sessions_lock = threading.Lock()

SEED_FIELDS = ("project_name", "project_type", "description", "start_date", "end_date")


def get_task_store_client():
    """Task store client from config, or None when none is configured."""
    return create_task_store_client(
        config.task_store_url,
        config.task_store_token,
        config.task_store_timeout,
    )


def _get_session(session_id):
    with sessions_lock:
        return sessions.get(session_id)


def _question_payload(agent):
    slot = agent.get_next_question()
    return slot.to_dict() if slot else None


def _task_rows(agent):
    selection = agent.selection
    return [
        {
            **task.to_dict(),
            'include': selection.is_included(task.title),
            'disabled': selection.is_disabled(task.title),
        }
        for task in agent.tasks
    ]


HTML_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <title>Construction Task Wizard</title>
    <style>
        body { font-family: -apple-system, sans-serif; max-width: 760px; margin: 40px auto; color: #222; }
        .msg { margin: 8px 0; padding: 8px 12px; border-radius: 6px; }
        .assistant { background: #f1f4f8; }
        .user { background: #e3f6e8; text-align: right; }
        .error { color: #b00020; }
        .task { display: flex; gap: 8px; padding: 4px 0; border-bottom: 1px solid #eee; }
        .task.done { color: #999; }
        button { padding: 6px 14px; }
    </style>
</head>
<body>
    <h1>Construction Task Wizard</h1>
    <div id="start">
        <input id="project-name" placeholder="Project name (optional)">
        <button onclick="startWizard()">Start</button>
    </div>
    <div id="chat"></div>
    <div id="answer" style="display:none">
        <input id="response" placeholder="Your answer" onkeydown="if(event.key==='Enter')respond()">
        <button onclick="respond()">Send</button>
    </div>
    <div id="plan" style="display:none">
        <h2 id="plan-title"></h2>
        <div id="tasks"></div>
        <input id="project-id" placeholder="Project id">
        <button onclick="commitTasks()">Create selected tasks</button>
        <div id="commit-result"></div>
    </div>
<script>
    let sessionId = null;
    let shown = 0;

    function render(transcript) {
        const chat = document.getElementById('chat');
        transcript.slice(shown).forEach(m => {
            const div = document.createElement('div');
            div.className = 'msg ' + m.role;
            div.textContent = m.text;
            chat.appendChild(div);
        });
        shown = transcript.length;
    }

    async function post(url, body) {
        const res = await fetch(url, {
            method: 'POST',
            headers: {'Content-Type': 'application/json'},
            body: JSON.stringify(body)
        });
        return res.json();
    }

    async function startWizard() {
        const name = document.getElementById('project-name').value;
        const data = await post('/api/start', name ? {project_name: name} : {});
        sessionId = data.session_id;
        document.getElementById('start').style.display = 'none';
        document.getElementById('answer').style.display = 'block';
        render(data.transcript);
        if (data.state === 'ready') loadTasks();
    }

    async function respond() {
        const input = document.getElementById('response');
        const data = await post('/api/respond', {session_id: sessionId, response: input.value});
        input.value = '';
        render(data.transcript);
        if (data.state === 'ready') loadTasks();
    }

    async function loadTasks() {
        document.getElementById('answer').style.display = 'none';
        const res = await fetch('/api/tasks?session_id=' + sessionId);
        const data = await res.json();
        document.getElementById('plan').style.display = 'block';
        document.getElementById('plan-title').textContent =
            data.tasks.length + ' tasks, ~' + data.estimated_weeks + ' weeks';
        const list = document.getElementById('tasks');
        list.innerHTML = '';
        data.tasks.forEach(t => {
            const row = document.createElement('label');
            row.className = 'task' + (t.disabled ? ' done' : '');
            const box = document.createElement('input');
            box.type = 'checkbox';
            box.checked = t.include;
            box.disabled = t.disabled;
            box.onchange = () => post('/api/select', {session_id: sessionId, title: t.title, include: box.checked});
            row.appendChild(box);
            row.appendChild(document.createTextNode(t.title + ' (' + t.priority + ', ' + t.estimated_hours + 'h)'));
            list.appendChild(row);
        });
    }

    async function commitTasks() {
        const projectId = document.getElementById('project-id').value;
        const data = await post('/api/commit', {session_id: sessionId, project_id: projectId});
        const el = document.getElementById('commit-result');
        if (data.error) {
            el.className = 'error';
            el.textContent = data.error;
        } else {
            el.className = '';
            el.textContent = 'Created ' + data.created_count + ' tasks, ' + data.failed_count + ' failed.';
        }
    }
</script>
</body>
</html>
"""


@app.route('/')
def index():
    return render_template_string(HTML_TEMPLATE)


@app.route('/api/start', methods=['POST'])
def start_wizard():
    data = request.get_json(silent=True) or {}
    project_id = data.get('project_id')

    seed = {}
    if project_id:
        client = get_task_store_client()
        if client is not None:
            try:
                seed.update(seed_from_project(client.get_project(project_id)))
            except TaskStoreError as e:
                logger.warning("Project lookup failed for %s: %s", project_id, e)
                return jsonify({'error': f'Could not load project: {e}'}), 502

    for key in SEED_FIELDS:
        if data.get(key):
            seed[key] = data[key]

    agent = TaskWizardAgent(seed=seed, project_id=project_id)
    session_id = secrets.token_hex(8)

    with sessions_lock:
        sessions[session_id] = {
            'agent': agent,
            'committed': False,
        }

    return jsonify({
        'session_id': session_id,
        'state': agent.state.value,
        'question': _question_payload(agent),
        'transcript': [m.to_dict() for m in agent.transcript],
        'progress': agent.progress_percentage
    })


@app.route('/api/question', methods=['GET'])
def get_question():
    entry = _get_session(request.args.get('session_id'))
    if entry is None:
        return jsonify({'error': 'Invalid session'}), 400

    agent = entry['agent']
    question = _question_payload(agent)

    if question is None:
        return jsonify({
            'complete': True,
            'estimated_weeks': agent.estimated_weeks,
            'generation_error': agent.generation_error
        })

    return jsonify({
        'complete': False,
        'question': question,
        'progress': agent.progress_percentage
    })


@app.route('/api/respond', methods=['POST'])
def respond():
    data = request.get_json(silent=True) or {}
    entry = _get_session(data.get('session_id'))
    if entry is None:
        return jsonify({'error': 'Invalid session'}), 400

    options = data.get('options') or []
    if not isinstance(options, list):
        return jsonify({'error': 'options must be a list'}), 400

    agent = entry['agent']
    accepted = agent.submit_answer(str(data.get('response') or ''), [str(o) for o in options])

    return jsonify({
        'accepted': accepted,
        'state': agent.state.value,
        'question': _question_payload(agent),
        'transcript': [m.to_dict() for m in agent.transcript],
        'progress': agent.progress_percentage
    })


@app.route('/api/tasks', methods=['GET'])
def get_tasks():
    entry = _get_session(request.args.get('session_id'))
    if entry is None:
        return jsonify({'error': 'Invalid session'}), 400

    agent = entry['agent']
    if not agent.is_ready:
        return jsonify({'error': 'Plan is not ready yet'}), 409

    return jsonify({
        'tasks': _task_rows(agent),
        'estimated_weeks': agent.estimated_weeks,
        'selected_weeks': agent.selection.estimate_selected_duration(),
        'generation_error': agent.generation_error
    })


@app.route('/api/select', methods=['POST'])
def select_task():
    data = request.get_json(silent=True) or {}
    entry = _get_session(data.get('session_id'))
    if entry is None:
        return jsonify({'error': 'Invalid session'}), 400

    agent = entry['agent']
    if not agent.is_ready:
        return jsonify({'error': 'Plan is not ready yet'}), 409

    title = data.get('title')
    include = data.get('include')
    if not title or not isinstance(include, bool):
        return jsonify({'error': 'title and boolean include are required'}), 400

    try:
        agent.selection.set_included(title, include)
    except KeyError:
        return jsonify({'error': f'Unknown task: {title}'}), 404
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({
        'title': title,
        'include': agent.selection.is_included(title),
        'selected_weeks': agent.selection.estimate_selected_duration()
    })


@app.route('/api/commit', methods=['POST'])
def commit_tasks():
    data = request.get_json(silent=True) or {}
    session_id = data.get('session_id')
    entry = _get_session(session_id)
    if entry is None:
        return jsonify({'error': 'Invalid session'}), 400

    agent = entry['agent']
    if not agent.is_ready:
        return jsonify({'error': 'Plan is not ready yet'}), 409

    project_id = data.get('project_id') or agent.project_id
    if not project_id:
        return jsonify({'error': 'project_id is required'}), 400

    client = get_task_store_client()
    if client is None:
        return jsonify({'error': 'Task store is not configured'}), 400

    with sessions_lock:
        if entry['committed']:
            return jsonify({'error': 'Tasks were already committed'}), 409
        entry['committed'] = True

    result = asyncio.run(agent.selection.commit(client.create_task_async, project_id))
    logger.info("Session %s committed %d tasks", session_id, result.created_count)

    return jsonify(result.to_dict())


@app.route('/api/health', methods=['GET'])
def health():
    with sessions_lock:
        count = len(sessions)
    return jsonify({
        'status': 'ok',
        'sessions': count,
        'task_store_configured': config.task_store_configured
    })


if __name__ == '__main__':
    print("""
╔═══════════════════════════════════════════════════════════════╗
║     CONSTRUCTION TASK WIZARD - WEB                            ║
╠═══════════════════════════════════════════════════════════════╣
║  1. Answer a few quick questions about the project            ║
║  2. Review the prioritized, estimated task plan               ║
║  3. Create the tasks you select in the task store             ║
╚═══════════════════════════════════════════════════════════════╝

Starting web server...

Open your browser to: http://localhost:5002

Press Ctrl+C to stop the server.
    """)

    app.run(debug=True, host='0.0.0.0', port=5002)
