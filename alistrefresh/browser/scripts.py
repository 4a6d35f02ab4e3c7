"""JavaScript snippets evaluated in the host page."""

MUTATION_BINDING = "__alistRefreshMutated"
ACTIVATE_BINDING = "__alistRefreshActivate"

# Forwards every batch of structural changes to Python. Coalescing happens on
# the Python side (NavigationWatcher). Runs for the top frame only.
OBSERVER_JS = f"""
(() => {{
    if (window.top !== window || window.__alistRefreshObserver) return;
    const observer = new MutationObserver(() => {{
        if (typeof window.{MUTATION_BINDING} === 'function') {{
            window.{MUTATION_BINDING}();
        }}
    }});
    observer.observe(document, {{ childList: true, subtree: true }});
    window.__alistRefreshObserver = observer;
}})();
"""

MOUNT_CONTROL_JS = """
({ id, label, binding }) => {
    if (document.getElementById(id)) return false;
    const button = document.createElement('button');
    button.id = id;
    button.textContent = label;
    Object.assign(button.style, {
        position: 'fixed',
        right: '20px',
        top: '50%',
        transform: 'translateY(-50%)',
        zIndex: '9999',
        padding: '10px 15px',
        cursor: 'pointer',
        backgroundColor: '#4CAF50',
        color: 'white',
        border: 'none',
        borderRadius: '5px',
        boxShadow: '0 2px 5px rgba(0,0,0,0.2)',
        display: 'none',
    });
    button.addEventListener('click', () => window[binding]());
    (document.body || document.documentElement).appendChild(button);
    return true;
}
"""

SET_DISPLAY_JS = """
({ id, visible }) => {
    const element = document.getElementById(id);
    if (!element) return false;
    element.style.display = visible ? 'block' : 'none';
    return true;
}
"""

CLICK_JS = """
(selector) => {
    const element = document.querySelector(selector);
    if (!element) return false;
    element.dispatchEvent(new MouseEvent('click', { bubbles: true, cancelable: true, view: window }));
    return true;
}
"""

NOTICE_JS = """
({ message, seconds }) => {
    const notice = document.createElement('div');
    notice.textContent = message;
    Object.assign(notice.style, {
        position: 'fixed',
        top: '16px',
        left: '50%',
        transform: 'translateX(-50%)',
        zIndex: '10000',
        padding: '12px 18px',
        maxWidth: '80vw',
        backgroundColor: '#c62828',
        color: 'white',
        borderRadius: '5px',
        boxShadow: '0 2px 8px rgba(0,0,0,0.3)',
        cursor: 'pointer',
    });
    notice.addEventListener('click', () => notice.remove());
    (document.body || document.documentElement).appendChild(notice);
    setTimeout(() => notice.remove(), seconds * 1000);
}
"""

NEXT_FRAME_JS = "() => new Promise((resolve) => requestAnimationFrame(() => resolve()))"

HAS_GLOBAL_JS = "(name) => typeof window[name] !== 'undefined'"
