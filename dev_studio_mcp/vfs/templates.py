"""Fixed starter file sets for new projects."""

import json

REACT_APP_JS = """import React, { useState } from 'react';
import './App.css';

function App() {
  const [message, setMessage] = useState('Welcome to DevChat Code!');

  return (
    <div className="App">
      <header className="App-header">
        <h1>{message}</h1>
        <button onClick={() => setMessage('Hello from React!')}>
          Click me
        </button>
      </header>
    </div>
  );
}

export default App;"""

REACT_APP_CSS = """.App {
  text-align: center;
  min-height: 100vh;
  display: flex;
  flex-direction: column;
  align-items: center;
  justify-content: center;
  background-color: #282c34;
}

.App-header {
  color: white;
}

button {
  background-color: #61dafb;
  border: none;
  color: #282c34;
  padding: 10px 20px;
  font-size: 16px;
  border-radius: 5px;
  cursor: pointer;
  margin-top: 20px;
}

button:hover {
  background-color: #4fa8c5;
}"""

REACT_INDEX_JS = """import React from 'react';
import ReactDOM from 'react-dom/client';
import './index.css';
import App from './App';

const root = ReactDOM.createRoot(document.getElementById('root'));
root.render(
  <React.StrictMode>
    <App />
  </React.StrictMode>
);"""

REACT_INDEX_CSS = """body {
  margin: 0;
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', 'Oxygen',
    'Ubuntu', 'Cantarell', 'Fira Sans', 'Droid Sans', 'Helvetica Neue',
    sans-serif;
  -webkit-font-smoothing: antialiased;
  -moz-osx-font-smoothing: grayscale;
}

code {
  font-family: source-code-pro, Menlo, Monaco, Consolas, 'Courier New',
    monospace;
}"""

REACT_PACKAGE_JSON = json.dumps(
    {
        "name": "my-react-app",
        "version": "0.1.0",
        "private": True,
        "dependencies": {
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
        },
    },
    indent=2,
)

TEMPLATES: dict[str, dict[str, str]] = {
    "react": {
        "src/App.js": REACT_APP_JS,
        "src/App.css": REACT_APP_CSS,
        "src/index.js": REACT_INDEX_JS,
        "src/index.css": REACT_INDEX_CSS,
        "package.json": REACT_PACKAGE_JSON,
    },
    "empty": {},
}

TEMPLATE_DEPENDENCIES: dict[str, set[str]] = {
    "react": {"react", "react-dom"},
}

# Bodies used by `create_file`, keyed by extension.
PLACEHOLDER_CONTENT = {
    "js": "// New file\n",
    "jsx": "// New file\n",
    "css": "/* New styles */\n",
    "json": "{\n  \n}",
}


def template_files(template: str) -> dict[str, str]:
    """Returns a copy of the template's files; unknown templates are empty."""
    return dict(TEMPLATES.get(template, {}))


def template_dependencies(template: str) -> set[str]:
    return set(TEMPLATE_DEPENDENCIES.get(template, set()))
