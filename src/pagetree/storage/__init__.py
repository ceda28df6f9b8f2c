"""Persistence for page collections.

Layout:
    ~/.pagetree/data/
    ├── gh_learning_knowledge_v1.json   # one raw JSON list per collection key
    ├── gh_learning_skills_v1.json
    └── ...

`kv` is the durable key-value layer, `repository` maps keys to node lists,
`sync` handles whole-store export/import.
"""
