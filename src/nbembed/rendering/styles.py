"""Stylesheet shipped with every embedded notebook.

Class names here are the styling contract themes rely on. Colors come from
the host site's CSS variables; html[data-theme='dark'] switches to the dark
variant.
"""

NOTEBOOK_CSS = """
.jupyter-notebook-embedded {
  border: 2px solid var(--secondary);
  border-radius: 12px;
  margin: 1.5rem 0;
  background: var(--light);
  box-shadow: 0 4px 8px rgba(0, 0, 0, 0.1);
  overflow: hidden;
}
.notebook-header {
  background: var(--secondary);
  padding: 1rem 1.5rem;
  border-bottom: 1px solid var(--gray);
  font-weight: 700;
  color: var(--lightgray);
  display: flex;
  align-items: center;
  justify-content: space-between;
  gap: 0.5rem;
  max-height: 2.5rem;
}
.notebook-header::before {
  content: "\\1F4D3";
  font-size: 1.2em;
}
.notebook-source {
  display: flex;
  align-items: center;
  gap: 0.5rem;
  font-weight: 400;
  font-size: 0.9em;
}
.notebook-link {
  color: var(--lightgray);
  text-decoration: none;
  border-bottom: 1px dotted var(--lightgray);
  transition: all 0.2s ease;
}
.notebook-link:hover {
  border-bottom-style: solid;
  opacity: 0.8;
}
.notebook-favicon {
  width: 16px;
  height: 16px;
  opacity: 0.8;
}
.notebook-cells {
  padding: 0;
}
.notebook-cell {
  border-bottom: 1px solid var(--lightgray);
  padding: 0.75rem 1.5rem;
}
.notebook-cell:last-child {
  border-bottom: none;
}
.notebook-markdown-cell {
  background: var(--light);
  line-height: 1.6;
}
.notebook-markdown-cell h1,
.notebook-markdown-cell h2,
.notebook-markdown-cell h3,
.notebook-markdown-cell h4 {
  margin: 0.5rem 0;
  color: var(--dark);
}
.notebook-markdown-cell p,
.notebook-markdown-cell ul {
  margin: 0.5rem 0;
}
.notebook-markdown-cell ul {
  padding-left: 1.5rem;
}
.notebook-code-input,
.notebook-outputs {
  display: flex;
  align-items: flex-start;
  gap: 0.75rem;
}
.notebook-code-input {
  margin: 0.25rem 0;
}
.notebook-outputs {
  margin-top: 0.5rem;
}
.notebook-execution-count,
.notebook-output-label {
  color: var(--secondary);
  font-family: monospace;
  font-size: 0.9em;
  font-weight: bold;
  min-width: 85px;
  user-select: none;
  flex-shrink: 0;
}
.notebook-execution-count {
  padding-top: 0.75rem;
}
.notebook-output-label {
  padding-top: 0.5rem;
}
.notebook-code-content,
.notebook-output-content {
  flex: 1;
  min-width: 0;
}
.notebook-code-content pre {
  margin: 0;
  overflow-x: auto;
  overflow-y: hidden;
}
.notebook-text-output pre,
.notebook-stream-output pre {
  background: var(--lightgray);
  border: 1px solid var(--gray);
  border-radius: 6px;
  padding: 0.75rem;
  margin: 0;
  overflow-x: auto;
  overflow-y: hidden;
  font-size: 0.9em;
  color: var(--dark);
  white-space: pre-wrap;
  word-wrap: break-word;
}
.notebook-image-output {
  text-align: center;
  padding: 1rem;
  background: var(--lightgray);
  border: 1px solid var(--gray);
  border-radius: 6px;
  margin: 0.5rem 0;
}
.notebook-image-output img {
  max-width: 100%;
  height: auto;
  border-radius: 6px;
  box-shadow: 0 2px 4px rgba(0, 0, 0, 0.1);
}
.notebook-error-output pre {
  background: #fdf2f2;
  border: 1px solid #fca5a5;
  border-radius: 6px;
  padding: 1rem;
  margin: 0;
  color: #dc2626;
  font-size: 0.9em;
}
.notebook-link-unavailable {
  color: var(--gray) !important;
  text-decoration: line-through;
}
.notebook-link-unavailable::after {
  content: " (notebook unavailable)";
  font-size: 0.8em;
  color: var(--gray);
}
html[data-theme='dark'] .jupyter-notebook-embedded {
  background: var(--darkgray);
  border-color: var(--secondary);
}
html[data-theme='dark'] .notebook-header {
  background: var(--secondary);
  color: var(--light);
}
html[data-theme='dark'] .notebook-link {
  color: var(--light);
  border-bottom-color: var(--light);
}
html[data-theme='dark'] .notebook-execution-count,
html[data-theme='dark'] .notebook-output-label {
  color: var(--tertiary);
}
html[data-theme='dark'] .notebook-text-output pre,
html[data-theme='dark'] .notebook-stream-output pre {
  background: var(--darkgray);
  border-color: var(--gray);
  color: var(--light);
}
html[data-theme='dark'] .notebook-image-output {
  background: var(--darkgray);
  border-color: var(--gray);
}
html[data-theme='dark'] .notebook-markdown-cell {
  background: var(--darkgray);
  color: var(--light);
}
html[data-theme='dark'] .notebook-markdown-cell h1,
html[data-theme='dark'] .notebook-markdown-cell h2,
html[data-theme='dark'] .notebook-markdown-cell h3,
html[data-theme='dark'] .notebook-markdown-cell h4 {
  color: var(--light);
}
html[data-theme='dark'] .notebook-error-output pre {
  background: #2d1b1b;
  border-color: #991b1b;
  color: #fca5a5;
}
"""
