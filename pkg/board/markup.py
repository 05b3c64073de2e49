# Built-in board markup: the three templates the components instantiate
# and the #app mount point. Override with `markup_path` in board.yaml.

PROJECT_INPUT_TEMPLATE = "project-input"
PROJECT_LIST_TEMPLATE = "project-list"
SINGLE_PROJECT_TEMPLATE = "single-project"
APP_HOST_ID = "app"

DEFAULT_MARKUP = """
<template id="project-input">
  <form>
    <div class="form-control">
      <label for="title">Title</label>
      <input type="text" id="title">
    </div>
    <div class="form-control">
      <label for="description">Description</label>
      <textarea id="description" rows="3"></textarea>
    </div>
    <div class="form-control">
      <label for="people">People</label>
      <input type="number" id="people" step="1" min="0" max="10">
    </div>
    <button type="submit">ADD PROJECT</button>
  </form>
</template>

<template id="single-project">
  <li draggable="true">
    <h2></h2>
    <h3></h3>
    <p></p>
  </li>
</template>

<template id="project-list">
  <section class="projects">
    <header>
      <h2></h2>
    </header>
    <ul></ul>
  </section>
</template>

<div id="app"></div>
"""
