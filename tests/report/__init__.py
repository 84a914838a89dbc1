"""Tests for report module.

Test Files and Coverage:
========================

| Test File           | Test Classes                              | Tested Constructs                   | Tested Functionalities                     |
|---------------------|-------------------------------------------|-------------------------------------|--------------------------------------------|
| test_collision.py   | FindCollisionsTest                        | find_collisions(), DuplicateGroup   | Singletons dropped, ordering, equality     |
| test_render.py      | RenderTextTest                            | render_text()                       | Console layout, escaped names              |
| test_serialize.py   | JsonReportTest, MsgpackReportTest,        | to_json(), to_msgpack(),            | Structure, raw byte paths, read back,      |
|                     | GroupIdTest                               | from_msgpack(), compute_group_id()  | stable group ids                           |
"""
