from fish_emulator.fish import Fish
from fish_emulator.messages import MESSAGES
from fish_emulator.vfs import Directory, File, resolve_path


def err(key, token):
    return MESSAGES[key].replace('$1', token)


def run(line, state):
    return Fish().execute(line, state)


def outputs(new):
    return [e.value for e in new.history[1:]]


# ---------- help ----------
def test_help_lists_commands(state):
    new = run('help', state)
    text = new.history[1].value
    for name in ['help', 'clear', 'ls', 'cat', 'mkdir', 'cd', 'pwd']:
        assert name in text
    assert new.structure is state.structure


def test_help_lists_extensions(state):
    new = Fish({'deploy': lambda state, inv: 'ok'}).execute('help', state)
    assert 'deploy' in new.history[1].value


def test_help_for_one_command(state):
    assert outputs(run('help ls', state))[0].startswith('ls\n  List directory contents')


def test_help_unknown_command(state):
    assert outputs(run('help nope', state)) == [err('COMMAND_NOT_FOUND', 'nope')]


# ---------- ls ----------
def test_ls_cwd_in_creation_order(state):
    assert outputs(run('ls', state)) == ['dir1  file1']


def test_ls_all_shows_hidden(state):
    assert outputs(run('ls -a', state)) == ['.privateDir  dir1  file1  .hiddenFile']


def test_ls_path(state):
    assert outputs(run('ls dir1', state)) == ['childDir  dir1File']


def test_ls_long(state):
    lines = outputs(run('ls -l dir1', state))[0].splitlines()
    assert len(lines) == 2
    assert lines[0].startswith('d')
    assert lines[0].endswith('childDir')
    assert lines[1].startswith('-')
    assert lines[1].endswith('dir1File')


def test_ls_file(state):
    assert outputs(run('ls file1', state)) == ['file1']


def test_ls_empty_directory(state):
    assert outputs(run('ls dir1/childDir', state)) == []


def test_ls_missing(state):
    assert outputs(run('ls missing', state)) == [err('NO_SUCH_FILE', 'missing')]


# ---------- cat ----------
def test_cat_file(state):
    assert outputs(run('cat file1', state)) == ['Contents of file 1']


def test_cat_relative_path(state):
    new = run('cd dir1; cat ../file1 dir1File', state)
    assert outputs(new) == ['Contents of file 1\nContents of a file inside dir1']


def test_cat_directory(state):
    assert outputs(run('cat dir1', state)) == [err('IS_A_DIRECTORY', 'dir1')]


def test_cat_missing(state):
    assert outputs(run('cat nope', state)) == [err('NO_SUCH_FILE', 'nope')]


def test_cat_without_operand(state):
    assert outputs(run('cat', state)) == [err('MISSING_OPERAND', 'cat')]


# ---------- mkdir ----------
def test_mkdir_then_ls(state):
    new = run('mkdir testDir', state)
    assert outputs(new) == []
    listing = outputs(run('ls', new))[0].split()
    assert listing.count('testDir') == 1
    assert listing[-1] == 'testDir'


def test_mkdir_twice(state):
    made = run('mkdir testDir', state)
    again = run('mkdir testDir', made)
    assert outputs(again) == [err('FILE_EXISTS', 'testDir')]
    assert again.structure == made.structure


def test_mkdir_on_existing_file(state):
    new = run('mkdir file1', state)
    assert outputs(new) == [err('FILE_EXISTS', 'file1')]
    assert isinstance(resolve_path(new.structure, '', 'file1'), File)


def test_mkdir_in_cwd(state):
    new = run('cd dir1 && mkdir sub', state)
    assert isinstance(resolve_path(new.structure, '', 'dir1/sub'), Directory)


def test_mkdir_nested_path(state):
    new = run('mkdir dir1/childDir/leaf', state)
    assert isinstance(resolve_path(new.structure, '', 'dir1/childDir/leaf'), Directory)


def test_mkdir_missing_parent(state):
    new = run('mkdir a/b', state)
    assert outputs(new) == [err('NO_SUCH_FILE', 'a/b')]


def test_mkdir_is_all_or_nothing(state):
    new = run('mkdir one two file1', state)
    assert outputs(new) == [err('FILE_EXISTS', 'file1')]
    assert 'one' not in new.structure.children
    assert new.structure is state.structure


# ---------- cd / pwd ----------
def test_cd_and_pwd(state):
    new = run('cd dir1/childDir && pwd', state)
    assert new.cwd == 'dir1/childDir'
    assert outputs(new) == ['/dir1/childDir']


def test_cd_dotdot(state):
    new = run('cd dir1/childDir; cd ../..; pwd', state)
    assert new.cwd == ''
    assert outputs(new) == ['/']


def test_cd_absolute(state):
    new = run('cd dir1; cd /dir1/childDir', state)
    assert new.cwd == 'dir1/childDir'


def test_cd_without_argument_goes_to_root(state):
    new = run('cd dir1; cd', state)
    assert new.cwd == ''


def test_cd_missing_leaves_cwd(state):
    new = run('cd dir1; cd missing', state)
    assert new.cwd == 'dir1'
    assert outputs(new) == [err('NO_SUCH_FILE', 'missing')]


def test_cd_into_file(state):
    new = run('cd file1', state)
    assert new.cwd == ''
    assert outputs(new) == [err('NOT_A_DIRECTORY', 'file1')]


# ---------- touch / rm ----------
def test_touch_creates_empty_file(state):
    new = run('touch notes.txt && cat notes.txt', state)
    assert outputs(new) == ['']
    assert resolve_path(new.structure, '', 'notes.txt') == File('notes.txt', '')


def test_touch_existing_is_noop(state):
    new = run('touch file1', state)
    assert outputs(new) == []
    assert resolve_path(new.structure, '', 'file1').content == 'Contents of file 1'


def test_rm_file(state):
    new = run('rm file1', state)
    assert 'file1' not in new.structure.children
    assert 'file1' in state.structure.children


def test_rm_directory_needs_r(state):
    new = run('rm dir1', state)
    assert outputs(new) == [err('IS_A_DIRECTORY', 'dir1')]
    assert 'dir1' in new.structure.children
    assert 'dir1' not in run('rm -r dir1', state).structure.children


def test_rm_missing(state):
    assert outputs(run('rm ghost', state)) == [err('NO_SUCH_FILE', 'ghost')]


def test_rm_root_is_refused(state):
    new = run('rm -r /', state)
    assert outputs(new) == [err('PERMISSION_DENIED', '/')]
    assert new.structure is state.structure


def test_rm_cwd_moves_to_parent(state):
    new = run('cd dir1/childDir; rm -r ..', state)
    assert new.cwd == ''
    assert 'dir1' not in new.structure.children
    assert resolve_path(new.structure, '', new.cwd) is new.structure


# ---------- echo / whoami ----------
def test_echo(state):
    assert outputs(run('echo hello  -n  world', state)) == ['hello -n world']


def test_whoami(state):
    assert outputs(run('whoami', state)) == ['tester']
    assert outputs(run('whoami', state.update(settings={}))) == ['guest']


def test_rm_paths_resolve_against_starting_cwd(state):
    nested = state.update(cwd='dir1')
    new = run('rm -r . file1', nested)
    assert outputs(new) == [err('NO_SUCH_FILE', 'file1')]
    assert new.structure is state.structure
    assert new.cwd == 'dir1'


def test_rm_several_paths_from_cwd(state):
    nested = state.update(cwd='dir1')
    new = run('rm -r dir1File . ../file1', nested)
    assert new.cwd == ''
    assert 'dir1' not in new.structure.children
    assert 'file1' not in new.structure.children


def test_file_with_trailing_separator(state):
    assert outputs(run('cat file1/.', state)) == [err('NO_SUCH_FILE', 'file1/.')]
    assert outputs(run('ls file1/', state)) == [err('NO_SUCH_FILE', 'file1/')]
